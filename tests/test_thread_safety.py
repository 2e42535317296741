"""Thread-safety integration tests for concurrent detection calls."""

from __future__ import annotations

import threading

from conftest import CHINESE_SIMPLIFIED, GERMAN, JAPANESE, PNG_HEADER

from charsleuth import EncodingDetector, detect

_SAMPLES: list[tuple[bytes, str]] = [
    (JAPANESE.encode("shift_jis"), "Shift_JIS"),
    (GERMAN.encode("latin-1"), "ISO-8859-1"),
    (CHINESE_SIMPLIFIED.encode("gb18030"), "GB18030"),
    (PNG_HEADER, "binary"),
]


def _label(data: bytes, detector: EncodingDetector | None) -> str:
    result = detect(data) if detector is None else detector.detect(data)
    return "binary" if result.is_binary else str(result.encoding)


def _run_concurrent_detect(
    n_workers: int, iterations: int, per_thread_detector: bool = False
) -> list[str]:
    """Spawn *n_workers* threads per sample, each detecting *iterations* times.

    Returns a list of error strings (empty = success).
    """
    errors: list[str] = []
    barrier = threading.Barrier(n_workers * len(_SAMPLES))

    def worker(data: bytes, expected: str) -> None:
        barrier.wait()
        detector = EncodingDetector() if per_thread_detector else None
        for _ in range(iterations):
            got = _label(data, detector)
            if got != expected:
                errors.append(f"Expected {expected!r}, got {got!r}")

    threads = []
    for _ in range(n_workers):
        for data, expected in _SAMPLES:
            t = threading.Thread(target=worker, args=(data, expected))
            threads.append(t)
            t.start()

    for t in threads:
        t.join()

    return errors


def test_concurrent_detect_no_corruption():
    errors = _run_concurrent_detect(n_workers=3, iterations=10)
    assert not errors, "Thread-safety violations:\n" + "\n".join(errors[:10])


def test_concurrent_detectors_per_thread():
    errors = _run_concurrent_detect(
        n_workers=4, iterations=5, per_thread_detector=True
    )
    assert not errors, "Thread-safety violations:\n" + "\n".join(errors[:10])


def test_cold_cache_concurrent_init():
    """Race on first-call loading of the shared reference data.

    Resets every load-once cache, then has many threads detect at the same
    moment so that they all hit the loading path together.
    """
    import charsleuth.models as _models
    import charsleuth.signatures as _signatures

    saved = (
        _models._PROFILE_SET,
        _signatures._DATABASE,
    )

    try:
        _models._PROFILE_SET = None
        _signatures._DATABASE = None

        errors = _run_concurrent_detect(n_workers=6, iterations=2)
        assert not errors, "Cold-cache race violations:\n" + "\n".join(errors[:10])
        assert _models.load_profile_set() is _models.load_profile_set()
    finally:
        _models._PROFILE_SET = saved[0]
        _signatures._DATABASE = saved[1]


def test_concurrent_supported_encodings():
    results: list[list[str]] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        results.append(EncodingDetector.supported_encodings())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r == results[0] for r in results)
