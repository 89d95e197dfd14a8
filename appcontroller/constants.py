"""
Shared module to hold constant values for the library
"""

# Delimiter used for nested dict keys
NESTED_DICT_DELIM = "."

# Delimiter between the kind tag and the name in a resource key
KEY_DELIM = "/"

# Meta key that lowers the share of replicas which must be ready, expressed as
# an integer percentage
SUCCESS_FACTOR_META_KEY = "success_factor"
DEFAULT_SUCCESS_FACTOR = 100

# Field manager recorded on objects created by this library
FIELD_MANAGER = "appcontroller"
