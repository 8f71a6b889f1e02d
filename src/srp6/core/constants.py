# Defaults shared by the protocol engine and the demonstration CLI

DEFAULT_BITSIZE = 512
DEFAULT_HASH_ALGORITHM = "SHA-1"
SUPPORTED_HASH_ALGORITHMS = ("SHA-1", "SHA-224", "SHA-256", "SHA-384", "SHA-512")

DEFAULT_SALT_LENGTH = 16  # bytes

DEFAULT_PBKDF2_ITERATIONS = 20000
MIN_PBKDF2_ITERATIONS = 1000

DEFAULT_SESSION_TIMEOUT = 0  # seconds, 0 disables the timeout

# Rejection sampling attempts before falling back to a restricted bit length
RANDOM_RANGE_MAX_ATTEMPTS = 1000

# Lower bound on the private ephemeral value bit length
PRIVATE_VALUE_MIN_BITS = 256

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
