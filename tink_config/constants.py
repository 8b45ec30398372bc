"""Registration constants."""

TYPE_URL_PREFIX = "type.googleapis.com/google.crypto.tink."

STEP_KEY_MANAGER = "key_manager"
STEP_WRAPPER = "wrapper"

SUPPORTED_CONFIG_ENCODINGS = {"json", "cbor"}
