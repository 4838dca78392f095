import logging
import re

from . import config
from .sequence import ParsedPattern, PatternType, ThrowSequence
from .tokenizer import TOKENIZER

logger = logging.getLogger(__name__)


class SiteswapError(Exception):
    pass


class SiteswapSyntaxError(SiteswapError, ValueError):
    error_type = 'syntax'


class EmptyPatternError(SiteswapSyntaxError):
    error_type = 'empty'


class InvalidSyntaxError(SiteswapSyntaxError):
    pass


class SiteswapParser:
    """
    Turns a raw siteswap string into (PatternType, ThrowSequence).

    Three dialects are recognised lexically:
        async      "531", "b97531"
        sync       "(4,4)", "(4x,2x)(2x,4x)"
        multiplex  "[33]", "[43]23"
    """

    SYNC_GROUP = re.compile(r'\(([0-9a-z])(x?),([0-9a-z])(x?)\)')
    SYNC_PATTERN = re.compile(r'(?:\([0-9a-z]x?,[0-9a-z]x?\))+')
    ASYNC_PATTERN = re.compile(r'[0-9a-z]+')

    def normalize(self, text):
        """Lowercase, drop whitespace and anything outside the siteswap alphabet."""
        text = re.sub(r'\s+', '', text.strip().lower())
        kept = ''.join(ch for ch in text if ch in config.ALLOWED_CHARS)
        if len(kept) != len(text):
            dropped = sorted(set(text) - config.ALLOWED_CHARS)
            logger.debug("Stripped non-siteswap characters %s from %r", dropped, text)
        return kept

    def classify(self, normalized):
        if '(' in normalized or ')' in normalized:
            return PatternType.SYNC
        if '[' in normalized or ']' in normalized:
            return PatternType.MULTIPLEX
        if self.ASYNC_PATTERN.fullmatch(normalized):
            return PatternType.ASYNC
        return PatternType.INVALID

    def parse(self, text):
        """
        Main method: returns a ParsedPattern.
        Raises EmptyPatternError / InvalidSyntaxError.
        """
        if text is None or not text.strip():
            raise EmptyPatternError("Pattern cannot be empty")

        normalized = self.normalize(text)
        if not normalized:
            raise InvalidSyntaxError(f"No siteswap characters found in {text!r}")

        self._check_balance(normalized)
        pattern_type = self.classify(normalized)

        if pattern_type == PatternType.SYNC:
            throws = self._parse_sync(normalized)
        elif pattern_type == PatternType.MULTIPLEX:
            throws = self._parse_multiplex(normalized)
        elif pattern_type == PatternType.ASYNC:
            throws = TOKENIZER.encode(normalized)
        else:
            raise InvalidSyntaxError(f"Invalid pattern format: '{normalized}'")

        return ParsedPattern(pattern_type, ThrowSequence(throws), normalized)

    # ------------------------------------------------------------------ #
    #  Internal                                                            #
    # ------------------------------------------------------------------ #

    def _check_balance(self, normalized):
        stack = []
        pairs = {')': '(', ']': '['}
        for pos, ch in enumerate(normalized):
            if ch in '([':
                if stack:
                    raise InvalidSyntaxError(f"Nested '{ch}' at position {pos}")
                stack.append(ch)
            elif ch in ')]':
                if not stack or stack.pop() != pairs[ch]:
                    raise InvalidSyntaxError(f"Unmatched '{ch}' at position {pos}")
        if stack:
            raise InvalidSyntaxError(f"Unclosed '{stack[-1]}'")

    def _parse_sync(self, normalized):
        if not self.SYNC_PATTERN.fullmatch(normalized):
            raise InvalidSyntaxError(
                f"Invalid synchronous pattern '{normalized}'. Use format: (4,4) or (4x,4x)"
            )
        throws = []
        for match in self.SYNC_GROUP.finditer(normalized):
            left, _, right, _ = match.groups()
            throws.append(TOKENIZER.encode_char(left))
            throws.append(TOKENIZER.encode_char(right))
        return throws

    def _parse_multiplex(self, normalized):
        throws = []
        i = 0
        while i < len(normalized):
            ch = normalized[i]
            if ch == '[':
                close = normalized.index(']', i)
                group = normalized[i + 1:close]
                if not group or not self.ASYNC_PATTERN.fullmatch(group):
                    raise InvalidSyntaxError(
                        f"Invalid multiplex group '[{group}]' at position {i}"
                    )
                throws.extend(TOKENIZER.encode(group))
                i = close + 1
                continue
            value = TOKENIZER.encode_char(ch)
            if value is None:
                raise InvalidSyntaxError(
                    f"Unexpected '{ch}' at position {i} in multiplex pattern '{normalized}'"
                )
            throws.append(value)
            i += 1
        return throws


PARSER = SiteswapParser()


def parse(text):
    return PARSER.parse(text)
