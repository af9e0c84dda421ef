# Type aliases for Python dictionaries
type RecordFields = dict[str, str]
