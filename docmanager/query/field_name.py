def dashes_to_camel_case(value: str, capitalize_first_character: bool = False) -> str:
    """ "created-at" -> "createdAt". Single words are returned as they are, apart from the first character's case. """
    words = value.replace("-", " ").split()
    camel = "".join(word[:1].upper() + word[1:] for word in words)

    if not capitalize_first_character:
        camel = camel[:1].lower() + camel[1:]

    return camel
