# vim: sw=4:ts=4:et:cc=120

# the request metadata entry that holds the object key
METADATA_KEY = "key"

# page size used when a list query does not specify maxkeys (or specifies 0)
DEFAULT_MAX_KEYS = 1000

# prefix used for custom object metadata headers
USER_METADATA_HEADER_PREFIX = "x-oss-meta-"

# the OSS error code returned when an object does not exist
OSS_ERROR_NO_SUCH_KEY = "NoSuchKey"

# storage targets
STORAGE_TARGET_OSS = "oss"
STORAGE_TARGET_LOCAL = "local"
