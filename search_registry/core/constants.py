"""Core constants: index metadata field names and shared literal values.

Every index document carries the private key and type id under these names so
hits can be resolved back to entities.
"""

# Metadata fields written alongside each index document
PRIVATE_KEY_FIELD = "private_key"
TYPE_ID_FIELD = "class_uid"

# Entity attribute read when optional_attributes is the boolean flag
DEFAULT_OPTIONAL_ATTRIBUTES_FIELD = "optional_attributes"
