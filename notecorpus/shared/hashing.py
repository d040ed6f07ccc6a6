import hashlib
import os
import re
import unicodedata


class HashingService:
    """Deterministic hashes for segment identity, versions and shingles."""

    @staticmethod
    def normalize_source(path: str) -> str:
        return os.path.normcase(os.path.abspath(path))

    @classmethod
    def segment_id(cls, source: str, heading: str, ordinal: int) -> str:
        key = f"{cls.normalize_source(source)}|{heading}|{ordinal}".encode("utf-8", errors="ignore")
        return f"seg:{hashlib.md5(key).hexdigest()}"

    @staticmethod
    def content_hash(content: str) -> str:
        return hashlib.md5(content.encode("utf-8", errors="ignore")).hexdigest()

    @staticmethod
    def shingle_hash(tokens) -> int:
        key = "\x1f".join(tokens).encode("utf-8", errors="ignore")
        digest = hashlib.blake2b(key, digest_size=8).digest()
        return int.from_bytes(digest, "little", signed=False)


class Slugifier:
    """Normalize headings into slug anchors."""

    @staticmethod
    def slugify(value: str) -> str:
        if not value:
            return ""
        value = unicodedata.normalize("NFKD", value)
        value = value.encode("ascii", "ignore").decode("ascii")
        value = re.sub(r"[^\w\s-]", "", value).strip().lower()
        value = re.sub(r"[-\s]+", "-", value)
        return value


__all__ = ["HashingService", "Slugifier"]
