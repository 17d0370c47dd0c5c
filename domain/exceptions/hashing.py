class InvalidHashError(ValueError):
    pass
