"""Shared constants for the TypeScript request generator."""

from typing import Final

# HTTP methods recognized on a path item, matched case-insensitively
HTTP_METHODS: Final = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

SLASH: Final = "/"

# Parameter transmission locations
PATH_LOCATION: Final = "path"
QUERY_LOCATION: Final = "query"
BODY_LOCATION: Final = "body"
# Location token routed to the form-data group. Historically "cookie" is what
# populates form data here, not "formData"; override it via the CLI or
# PathResolver.of(..., form_data_location=...).
FORM_DATA_LOCATION: Final = "cookie"

# Response codes consulted for the response type, in order
SUCCESS_RESPONSE_CODES: Final = ("200", "201")

# Content types
JSON_CONTENT_TYPE: Final = "application/json"
MULTIPART_CONTENT_TYPE: Final = "multipart/form-data"

# TypeScript primitive type names
TS_NUMBER: Final = "number"
TS_STRING: Final = "string"
TS_BOOLEAN: Final = "boolean"
TS_ANY: Final = "any"
TS_FILE: Final = "File"
TS_NULL: Final = "null"
TS_UNDEFINED: Final = "undefined"

# Optional marker appended to field names of non-required parameters
OPTIONAL_MARKER: Final = "?"

# Name given to an OpenAPI 3 requestBody when it is turned into a body parameter
REQUEST_BODY_PARAM_NAME: Final = "requestBody"

# Generated module defaults
DEFAULT_FILE_NAME: Final = "requests.ts"
DEFAULT_REQUEST_ACTION_IMPORT: Final = "./createRequestAction"
REQUEST_ACTION_FACTORY: Final = "createRequestAction"

# Exit codes for better error reporting
EXIT_SUCCESS: Final = 0
EXIT_FILE_NOT_FOUND: Final = 1
EXIT_INVALID_SPEC: Final = 2
EXIT_GENERATION_ERROR: Final = 3
EXIT_PARTIAL_OUTPUT: Final = 4
