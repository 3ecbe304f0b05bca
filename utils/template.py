from typing import Mapping


class InvoiceTemplate:
    """
    Fills a static HTML document by swapping sample literals for real values.

    ``tokens`` maps a field name to the literal that stands in for it in the
    template, e.g. ``{"customer_name": "John Doe"}``. Only the first
    occurrence of each literal in the original text is replaced, and the
    substitution is a single pass: replacement values are never scanned for
    other tokens.
    """

    def __init__(self, source: str, tokens: Mapping[str, str]):
        self.source = source
        self.tokens = dict(tokens)

    @classmethod
    def from_file(cls, path: str, tokens: Mapping[str, str]) -> "InvoiceTemplate":
        with open(path, "r", encoding="utf-8") as fh:
            return cls(fh.read(), tokens)

    def render(self, values: Mapping[str, object]) -> str:
        unknown = set(values) - set(self.tokens)
        if unknown:
            raise KeyError(f"Unknown template fields: {', '.join(sorted(unknown))}")

        # (start, end, replacement) for the first hit of each token
        spans = []
        for name, token in self.tokens.items():
            if name not in values:
                continue
            start = self.source.find(token)
            if start == -1:
                continue
            end = start + len(token)
            if any(start < s_end and s_start < end for s_start, s_end, _ in spans):
                # overlaps a token that was already claimed
                continue
            spans.append((start, end, str(values[name])))

        parts = []
        cursor = 0
        for start, end, replacement in sorted(spans):
            parts.append(self.source[cursor:start])
            parts.append(replacement)
            cursor = end
        parts.append(self.source[cursor:])
        return "".join(parts)
