"""Runtime support imported by compiled schemas and generated builder modules."""

from schemabuilder.runtime.diagnostics import CollectingReporter, LoggingReporter, NullReporter, resolve_reporter
from schemabuilder.runtime.helpers import (
    convert_to_string_array,
    map_contains_all_keys,
    map_contains_only_keys,
    map_has_key,
    pattern_matches,
    unpack_map,
)
from schemabuilder.runtime.messages import BlobMessage, Message, OneOfBranch, OneOfMessage, StringArrayMessage

__all__ = [
    "BlobMessage",
    "CollectingReporter",
    "LoggingReporter",
    "Message",
    "NullReporter",
    "OneOfBranch",
    "OneOfMessage",
    "StringArrayMessage",
    "convert_to_string_array",
    "map_contains_all_keys",
    "map_contains_only_keys",
    "map_has_key",
    "pattern_matches",
    "resolve_reporter",
    "unpack_map",
]
