"""
Parsing and matching for kubernetes label selectors.

Both equality-based and set-based requirements are supported:

    app=web,tier!=cache
    env in (prod, staging),!canary,release
"""

# Standard
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import re

# First Party
import alog

# Local
from .exceptions import SelectorParseError

log = alog.use_channel("LABEL")

## Globals #####################################################################

# Name segment of a label key and the whole of a label value
_NAME_PATTERN = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?$")
_DNS_SUBDOMAIN_PATTERN = re.compile(
    r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"
)
MAX_NAME_LEN = 63
MAX_PREFIX_LEN = 253

OP_EQUALS = "="
OP_DOUBLE_EQUALS = "=="
OP_NOT_EQUALS = "!="
OP_IN = "in"
OP_NOT_IN = "notin"
OP_EXISTS = "exists"
OP_DOES_NOT_EXIST = "!"

_SET_REQUIREMENT = re.compile(
    r"^(?P<key>[^\s!=]+)\s+(?P<op>in|notin)\s+\((?P<values>.*)\)$"
)


## Types #######################################################################


@dataclass(frozen=True)
class Requirement:
    """A single term of a label selector"""

    key: str
    operator: str
    values: List[str] = field(default_factory=list)

    def matches(self, labels: Dict[str, str]) -> bool:
        """Check whether a set of labels satisfies this requirement"""
        present = self.key in labels
        value = str(labels[self.key]) if present else None
        if self.operator in (OP_EQUALS, OP_DOUBLE_EQUALS, OP_IN):
            return present and value in self.values
        if self.operator in (OP_NOT_EQUALS, OP_NOT_IN):
            return not present or value not in self.values
        if self.operator == OP_EXISTS:
            return present
        return not present

    def __str__(self):
        if self.operator == OP_EXISTS:
            return self.key
        if self.operator == OP_DOES_NOT_EXIST:
            return f"!{self.key}"
        if self.operator in (OP_IN, OP_NOT_IN):
            return f"{self.key} {self.operator} ({','.join(sorted(self.values))})"
        return f"{self.key}{self.operator}{self.values[0]}"


@dataclass(frozen=True)
class LabelSelector:
    """A parsed label selector. All requirements must match."""

    requirements: List[Requirement] = field(default_factory=list)

    def matches(self, labels: Optional[Dict[str, str]]) -> bool:
        labels = labels or {}
        return all(req.matches(labels) for req in self.requirements)

    def __str__(self):
        return ",".join(str(req) for req in self.requirements)


## Public ######################################################################


def parse_selector(selector: str) -> LabelSelector:
    """Parse a selector expression

    Args:
        selector:  str
            The selector string in the kubernetes label selector syntax

    Returns:
        label_selector:  LabelSelector
            The parsed selector. An empty string parses to an empty selector
            which matches everything.

    Raises:
        SelectorParseError: The expression or one of its keys/values is
            malformed
    """
    if not isinstance(selector, str):
        raise SelectorParseError(str(selector), "selector must be a string")
    log.debug3("Parsing selector [%s]", selector)
    if not selector.strip():
        return LabelSelector()

    requirements = []
    for term in _split_terms(selector):
        term = term.strip()
        if not term:
            raise SelectorParseError(selector, "empty requirement")
        requirements.append(_parse_requirement(selector, term))
    return LabelSelector(requirements)


def format_term(key: str, value: str) -> str:
    """Build a single equality term, validating both halves"""
    term = f"{key}={value}"
    _validate_key(term, key)
    _validate_value(term, str(value))
    return term


def selector_from_dict(match_labels: Dict[str, str]) -> LabelSelector:
    """Build an equality selector that requires every given label"""
    return parse_selector(
        ",".join(format_term(key, val) for key, val in sorted(match_labels.items()))
    )


## Implementation ##############################################################


def _split_terms(selector: str) -> List[str]:
    """Split on commas that are not inside a parenthesized value set"""
    terms = []
    current = ""
    depth = 0
    for char in selector:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise SelectorParseError(selector, "unbalanced parentheses")
        if char == "," and depth == 0:
            terms.append(current)
            current = ""
            continue
        current += char
    if depth != 0:
        raise SelectorParseError(selector, "unbalanced parentheses")
    terms.append(current)
    return terms


def _parse_requirement(selector: str, term: str) -> Requirement:
    set_match = _SET_REQUIREMENT.match(term)
    if set_match:
        key = set_match.group("key")
        values = [val.strip() for val in set_match.group("values").split(",")]
        _validate_key(selector, key)
        if not any(values):
            raise SelectorParseError(selector, f"empty value set for [{key}]")
        for val in values:
            _validate_value(selector, val)
        return Requirement(key, set_match.group("op"), values)

    # Check the two character operators before the single character one
    for operator in (OP_DOUBLE_EQUALS, OP_NOT_EQUALS, OP_EQUALS):
        if operator in term:
            key, _, value = term.partition(operator)
            key, value = key.strip(), value.strip()
            _validate_key(selector, key)
            _validate_value(selector, value)
            return Requirement(key, operator, [value])

    if term.startswith(OP_DOES_NOT_EXIST):
        key = term[1:].strip()
        _validate_key(selector, key)
        return Requirement(key, OP_DOES_NOT_EXIST)

    _validate_key(selector, term)
    return Requirement(term, OP_EXISTS)


def _validate_key(selector: str, key: str):
    prefix, _, name = key.rpartition("/")
    if "/" in key and not (
        prefix
        and len(prefix) <= MAX_PREFIX_LEN
        and _DNS_SUBDOMAIN_PATTERN.match(prefix)
    ):
        raise SelectorParseError(selector, f"invalid key prefix [{prefix}]")
    if not name or len(name) > MAX_NAME_LEN or not _NAME_PATTERN.match(name):
        raise SelectorParseError(selector, f"invalid key [{key}]")


def _validate_value(selector: str, value: str):
    if len(value) > MAX_NAME_LEN or not _NAME_PATTERN.match(value):
        raise SelectorParseError(selector, f"invalid value [{value}]")
