"""Generic element tree walked by the importer."""

from collections.abc import Iterator

from pydantic import BaseModel, Field


class DocumentNode(BaseModel):
    """
    One element of a parsed model document.

    Text and attribute values are already whitespace-normalized by the
    document reader; the importer only deals with field lookups.
    """

    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    text: str = ""
    children: list["DocumentNode"] = Field(default_factory=list)

    def children_named(self, tag: str) -> Iterator["DocumentNode"]:
        return (child for child in self.children if child.tag == tag)

    def child(self, tag: str) -> "DocumentNode | None":
        return next(self.children_named(tag), None)

    def field(self, name: str) -> str | None:
        """
        Look up a field value, tolerating equivalent encodings.

        "factor-value" is found in any of:
            <requirement factor-value="3.2"/>
            <requirement><factor-value>3.2</factor-value></requirement>
            <requirement><factor value="3.2"/></requirement>
            <requirement><factor><value>3.2</value></factor></requirement>

        Returns:
            The value, or None when the field is absent or blank
        """
        value = self.attributes.get(name)
        if value:
            return value

        node = self.child(name)
        if node is not None and node.text:
            return node.text

        head, sep, tail = name.partition("-")
        if sep and tail:
            nested = self.child(head)
            if nested is not None:
                return nested.field(tail)
        return None
