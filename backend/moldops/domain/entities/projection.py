"""Column projection strings — ``"id, name, machines(name, machine_code)"``.

The hosted gateway accepts these strings verbatim. The local gateway parses
them into a :class:`Projection` tree so it can resolve embedded relations.
"""

from dataclasses import dataclass, field


@dataclass
class Projection:
    """Parsed column projection; ``embeds`` are nested relation projections."""

    name: str | None = None
    fields: list[str] = field(default_factory=list)
    embeds: list["Projection"] = field(default_factory=list)

    @property
    def selects_all(self) -> bool:
        return not self.fields or "*" in self.fields


def parse_projection(spec: str | None, name: str | None = None) -> Projection:
    """Parse a projection string into a :class:`Projection`.

    ``None`` or an empty string selects every column.
    """
    projection = Projection(name=name)
    if not spec or not spec.strip():
        projection.fields.append("*")
        return projection

    for part in _split_top_level(spec):
        if "(" in part:
            if not part.endswith(")"):
                raise ValueError(f"Unbalanced projection: {part!r}")
            rel_name, inner = part.split("(", 1)
            rel_name = rel_name.strip()
            # "alias:relation(...)": keep the alias as the embed key
            if ":" in rel_name:
                rel_name = rel_name.split(":", 1)[0].strip()
            projection.embeds.append(parse_projection(inner[:-1], name=rel_name))
        else:
            projection.fields.append(part)

    return projection


def _split_top_level(spec: str) -> list[str]:
    """Split on commas that are not nested inside parentheses."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in spec:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced projection: {spec!r}")
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise ValueError(f"Unbalanced projection: {spec!r}")
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [p for p in parts if p]
