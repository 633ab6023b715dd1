ABSTRACT = "ABSTRACT"
""" 
Used as the __collection_name__ of Document classes that are never stored themselves (base classes).
Calling get_collection_name() on such a class raises.
"""
