from kenlo_pricing.utils.logger import setup_logging
from kenlo_pricing.utils.hashing import sha256_hash, file_sha256

__all__ = ["setup_logging", "sha256_hash", "file_sha256"]
