"""reqmatch — request-expectation matching with self-describing diagnostics.

All public types are exported from this module for flat imports:

    from reqmatch import Matchers, Method, Path, QueryEq, parse
"""

__version__ = "0.1.0"

# Config — see reqmatch._config for the dict shape
from reqmatch._config import (
    MAX_EXPECTATIONS,
    MAX_VALUE_LENGTH,
    ConfigParseError,
    TooManyExpectationsError,
    ValueTooLongError,
    dump_expectation,
    dump_matchers,
    parse_expectation,
    parse_matchers_config,
    parse_request_config,
)

# Expectation variants
from reqmatch._expectation import (
    MATCHER_TYPES,
    BodyEq,
    BodyMiss,
    FragmentEq,
    FragmentMiss,
    HeaderEq,
    HeaderExists,
    HeaderMiss,
    Matcher,
    Method,
    Path,
    QueryEq,
    QueryExists,
    QueryMiss,
)

# Aggregator
from reqmatch._matchers import MatcherError, Matchers, format_report

# Request model
from reqmatch._request import Request, RequestBuilder, parse

__all__ = [
    # Request model
    "Request",
    "RequestBuilder",
    "parse",
    # Expectation variants
    "Matcher",
    "MATCHER_TYPES",
    "Method",
    "Path",
    "QueryExists",
    "QueryMiss",
    "QueryEq",
    "FragmentEq",
    "FragmentMiss",
    "HeaderExists",
    "HeaderMiss",
    "HeaderEq",
    "BodyMiss",
    "BodyEq",
    # Aggregator
    "Matchers",
    "MatcherError",
    "format_report",
    # Config
    "ConfigParseError",
    "TooManyExpectationsError",
    "ValueTooLongError",
    "MAX_EXPECTATIONS",
    "MAX_VALUE_LENGTH",
    "parse_expectation",
    "parse_matchers_config",
    "parse_request_config",
    "dump_expectation",
    "dump_matchers",
]
