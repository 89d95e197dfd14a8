"""
Module to validate values in a loaded config against a parallel validation
config. Each leaf of the validation config is a dict holding a "type" and the
keyword arguments for that parameter type, e.g.

    namespace:
      type: str
      min_len: 1
"""

# Standard
from typing import Any, Dict, List, Optional, Type
import abc
import builtins

# First Party
import aconfig
import alog

# Local
from .. import constants
from ..utils import nested_get

log = alog.use_channel("CONFG")

## Public ######################################################################


def get_invalid_params(
    config: aconfig.Config,
    validation_config: aconfig.Config,
) -> List[str]:
    """Get the nested keys of all params that fail validation

    Args:
        config:  aconfig.Config
            The parsed config with any override values
        validation_config:  aconfig.Config
            The parallel config holding validation setup

    Returns:
        invalid_params:  List[str]
            The '.' delimited keys of all invalid parameters
    """
    invalid_params = []
    for val_key, param in parse_validation_config(validation_config).items():
        if not param.validate(nested_get(config, val_key)):
            log.warning("Config value for [%s] failed validation", val_key)
            invalid_params.append(val_key)
    return invalid_params


def parse_validation_config(
    validation_config: dict,
    prefix_parts: Optional[List[str]] = None,
) -> Dict[str, "ValidatedParameter"]:
    """Recursively parse a validation config into a flat mapping from nested
    key to parameter validator
    """
    params = {}
    prefix_parts = prefix_parts or []
    for key, val in validation_config.items():
        assert isinstance(key, str), f"Validation keys must be strings, got {key!r}"
        if not isinstance(val, dict):
            continue
        key_parts = prefix_parts + [key]
        nested_key = constants.NESTED_DICT_DELIM.join(key_parts)
        param = _construct_parameter(val) if "type" in val else None
        if param is not None:
            log.debug3("Parameter [%s]", nested_key)
            params[nested_key] = param
        else:
            log.debug3("Section [%s]", nested_key)
            params.update(parse_validation_config(val, key_parts))
    return params


## Parameter Types #############################################################

# pylint: disable=too-few-public-methods


class ValidatedParameter(abc.ABC):
    """A single config value with type and value validation"""

    TYPE_KEY = None
    TYPES = ()

    def __init__(self, optional: bool = False):
        self.optional = optional

    def validate(self, value: Any) -> bool:
        """Check a loaded value against this parameter"""
        if value is None and self.optional:
            return True

        # bool is a subclass of int, so it has to be excluded explicitly from
        # the numeric types
        if isinstance(value, bool) and bool not in self.TYPES:
            log.warning("Rejecting bool for %s", type(self).__name__)
            return False
        if not isinstance(value, self.TYPES):
            log.warning("Expected one of %s, got <%s>", self.TYPES, type(value))
            return False

        if not self._validate_value(value):
            log.warning("Value [%s] out of range for %s", value, type(self).__name__)
            return False
        return True

    @abc.abstractmethod
    def _validate_value(self, value: Any) -> bool:
        """Type-specific value validation"""


class NumberParameter(ValidatedParameter):
    """int or float with optional inclusive bounds"""

    TYPE_KEY = "number"
    TYPES = (int, float)

    def __init__(
        self,
        *,
        min=None,  # pylint: disable=redefined-builtin
        max=None,  # pylint: disable=redefined-builtin
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.min = min
        self.max = max

    def _validate_value(self, value) -> bool:
        return (self.min is None or value >= self.min) and (
            self.max is None or value <= self.max
        )


class IntParameter(NumberParameter):
    TYPE_KEY = "int"
    TYPES = (int,)


class FloatParameter(NumberParameter):
    TYPE_KEY = "float"
    TYPES = (float,)


class StrParameter(ValidatedParameter):
    """str with optional inclusive length bounds"""

    TYPE_KEY = "str"
    TYPES = (str,)

    def __init__(
        self,
        *,
        min_len: Optional[int] = None,
        max_len: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.min_len = min_len
        self.max_len = max_len

    def _validate_value(self, value: str) -> bool:
        return (self.min_len is None or len(value) >= self.min_len) and (
            self.max_len is None or len(value) <= self.max_len
        )


class BoolParameter(ValidatedParameter):
    TYPE_KEY = "bool"
    TYPES = (bool,)

    def _validate_value(self, value: bool) -> bool:
        return True


class EnumParameter(ValidatedParameter):
    """One of a fixed set of str/int/None values"""

    TYPE_KEY = "enum"
    TYPES = (str, int, type(None))

    def __init__(self, *, values: list, **kwargs):
        super().__init__(**kwargs)
        assert isinstance(values, list) and values, "Must specify enum values!"
        self.values = values

    def _validate_value(self, value) -> bool:
        return value in self.values


class ListParameter(StrParameter):
    """list with optional length bounds and builtin item type"""

    TYPE_KEY = "list"
    TYPES = (list,)

    def __init__(self, *, item_type: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.item_type = None
        if item_type is not None:
            assert hasattr(builtins, item_type), f"Unsupported item_type: {item_type}"
            self.item_type = getattr(builtins, item_type)

    def _validate_value(self, value: list) -> bool:
        return super()._validate_value(value) and (
            self.item_type is None
            or all(isinstance(item, self.item_type) for item in value)
        )


# pylint: enable=too-few-public-methods

## Factory #####################################################################


def _all_parameter_types(
    param_class: Type[ValidatedParameter],
) -> Dict[str, Type[ValidatedParameter]]:
    """Recursively collect every concrete parameter type by its TYPE_KEY"""
    types = {}
    if not param_class.__abstractmethods__:
        types[param_class.TYPE_KEY] = param_class
    for subclass in param_class.__subclasses__():
        types.update(_all_parameter_types(subclass))
    return types


_PARAMETER_TYPES = _all_parameter_types(ValidatedParameter)


def _construct_parameter(param_args: dict) -> Optional[ValidatedParameter]:
    """Build a parameter from its validation config entry. If the "type" is
    not a known parameter type, None is returned so that the entry is treated
    as a nested section.
    """
    param_type = param_args.get("type")
    if not (isinstance(param_type, str) and param_type in _PARAMETER_TYPES):
        return None
    kwargs = {key: val for key, val in param_args.items() if key != "type"}
    return _PARAMETER_TYPES[param_type](**kwargs)
