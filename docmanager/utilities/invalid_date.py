class InvalidDate:
    """ Returned by the date normalizers instead of raising when the input can't be parsed.
    It is falsy, so `if not normalize_date(value)` reads the same as checking for a failed parse. """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "InvalidDate"

    def __bool__(self):
        return False

INVALID_DATE = InvalidDate()
