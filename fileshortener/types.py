from typing import Any, TypeAlias


# Type aliases for Python dictionaries
HandlerEvent: TypeAlias = dict[str, Any]
HandlerResponse: TypeAlias = dict[str, Any]
AppConfig: TypeAlias = dict[str, Any]
RecordDocument: TypeAlias = dict[str, Any]
