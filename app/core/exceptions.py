class InvalidInput(ValueError):
    """A submission that can't be ranked: missing name or non-numeric score"""
