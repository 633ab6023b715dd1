class Undefined:
    """ Utilize this singleton when you need to disambiguate between a parameter which is passed as None (or 0, or "") vs. a parameter which has not been passed at all. 
    NOTE: This is currently used in:
        - ParameterResolver (ResolutionMode.PROVIDED)
        - GenericDocumentManager's optional override arguments
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Undefined"

    def __bool__(self):
        return False

UNDEFINED = Undefined()
