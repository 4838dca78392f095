from . import config


class ThrowTokenizer:
    """
    Maps siteswap characters to throw heights and back.
    '0'..'9' -> 0..9, 'a'..'z' -> 10..35 (case-insensitive).
    """

    def __init__(self, alphabet=config.THROW_CHARS):
        self.vocab = {ch: i for i, ch in enumerate(alphabet)}
        self.idx_to_token = {i: ch for ch, i in self.vocab.items()}

    def encode_char(self, char):
        """Height for one character, or None if it is not a throw."""
        return self.vocab.get(char.lower())

    def encode(self, text):
        """
        Converts a string of throw characters into heights.
        Raises ValueError on the first non-throw character.
        """
        heights = []
        for pos, char in enumerate(text):
            value = self.encode_char(char)
            if value is None:
                raise ValueError(f"'{char}' at position {pos} is not a throw")
            heights.append(value)
        return heights

    def decode(self, heights):
        """Converts heights back into their canonical lowercase string."""
        chars = []
        for h in heights:
            token = self.idx_to_token.get(int(h))
            if token is None:
                raise ValueError(f"Throw height {h} outside 0..{config.MAX_THROW}")
            chars.append(token)
        return "".join(chars)


TOKENIZER = ThrowTokenizer()
