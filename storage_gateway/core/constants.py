"""Core constants shared by request records and storage backends."""

# Content type applied when an upload does not name one
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Signed URL lifetime in seconds when the request does not set one
DEFAULT_SIGNED_URL_EXPIRY = 3600

# Read size for draining object streams and local files
CHUNK_SIZE = 64 * 1024  # 64KB

# Local backend trees for metadata sidecars and in-flight uploads, beside the buckets
META_DIR = ".meta"
TEMP_DIR = ".tmp"
TEMP_PREFIX = "upload_"
