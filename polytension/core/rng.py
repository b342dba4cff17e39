from __future__ import annotations

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0


def _u32(n: int) -> int:
    return n & UINT32_MASK


def _rotl32(n: int, bits: int) -> int:
    n &= UINT32_MASK
    return ((n << bits) | (n >> (32 - bits))) & UINT32_MASK


def _code_units(text: str) -> list[int]:
    # Hash over UTF-16 code units so seeds outside the BMP match browser output.
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


class Xmur3:
    """String hash expanded into a stream of 32-bit seed words."""

    def __init__(self, text: str):
        units = _code_units(text)
        h = 1779033703 ^ len(units)
        for unit in units:
            h = _u32((h ^ unit) * 3432918353)
            h = _rotl32(h, 13)
        self.h = h

    def __call__(self) -> int:
        h = self.h
        h = _u32((h ^ (h >> 16)) * 2246822507)
        h = _u32((h ^ (h >> 13)) * 3266489909)
        h ^= h >> 16
        self.h = h
        return h


class Sfc32:
    """Small fast counting generator over four 32-bit registers."""

    def __init__(self, a: int, b: int, c: int, d: int):
        self.a = _u32(a)
        self.b = _u32(b)
        self.c = _u32(c)
        self.d = _u32(d)

    def __call__(self) -> float:
        a, b, c, d = self.a, self.b, self.c, self.d
        t = _u32(a + b)
        a = b ^ (b >> 9)
        b = _u32(c + (c << 3))
        c = _rotl32(c, 21)
        d = _u32(d + 1)
        t = _u32(t + d)
        c = _u32(c + t)
        self.a, self.b, self.c, self.d = a, b, c, d
        return t / UINT32_SCALE


class SeededRandom:
    """Reproducible stream of floats in [0, 1) keyed by an arbitrary string.

    The same seed yields the same sequence as the browser build of the
    pattern, so a seed copied from a shared URL reproduces the picture.
    """

    def __init__(self, seed: str):
        self.seed = str(seed)
        hasher = Xmur3(self.seed)
        self.seed_words = (hasher(), hasher(), hasher(), hasher())
        self._stream = Sfc32(*self.seed_words)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self._stream()

    next = random

    def take(self, n: int) -> list[float]:
        return [self.random() for _ in range(n)]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r}, calls={self.calls})"
