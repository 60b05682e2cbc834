"""
Cache key generation.
"""


def simple_hash(text: str) -> str:
    """
    Fast non-cryptographic 32-bit hash of text, as lowercase hex.

    Rolling ``h * 31 + unit`` over UTF-16 code units, wrapped to a signed
    32-bit integer, then made non-negative. Collisions only cost a cache miss.
    """
    data = text.encode("utf-16-le", errors="surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(abs(h), "x")


def generate_cache_key(source_language: str, target_language: str, text: str) -> str:
    """Build the cache key for a (source, target, text) triple."""
    return f"{source_language}:{target_language}:{simple_hash(text)}"


def language_pair_scope(source_language: str, target_language: str) -> str:
    """Key prefix shared by every entry of one language pair."""
    return f"{source_language}:{target_language}:"
