class InvalidQueryParameter(Exception):
    """
    Raised when query parameter is deemed as invalid
    """
    def __init__(self, key: str, val: str = '', error: str = '', *args: object) -> None:
        super().__init__('Invalid query parameter: %s - %s\nError: %s' % (key, val, error), *args)
