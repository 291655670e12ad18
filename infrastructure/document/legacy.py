"""Translation of legacy <sqale> documents into the canonical layout.

Legacy layout:

    <sqale>
      <chc>
        <key>EFFICIENCY</key>
        <name>Efficiency</name>
        <chc>
          <rule-repo>checkstyle</rule-repo>
          <rule-key>Regexp</rule-key>
          <prop><key>remediationFunction</key><txt>linear</txt></prop>
          <prop><key>remediationFactor</key><val>3.2</val><txt>h</txt></prop>
        </chc>
      </chc>
    </sqale>

A <chc> holding a rule key is a requirement, any other <chc> a characteristic.
Function names are left untouched; their legacy spellings are resolved by
domain.remediation.functions.
"""

from domain.document import DocumentNode

LEGACY_ROOT_TAG = "sqale"
LEGACY_NODE_TAG = "chc"

# prop key -> (field for <val>, field for <txt>)
_PROP_FIELDS: dict[str, tuple[str | None, str | None]] = {
    "remediationfunction": (None, "function"),
    "remediationfactor": ("factor-value", "factor-unit"),
    "offset": ("offset-value", "offset-unit"),
    "remediationoffset": ("offset-value", "offset-unit"),
    "threshold": ("threshold", None),
    "remediationthreshold": ("threshold", None),
}


def translate_legacy(root: DocumentNode) -> DocumentNode:
    return DocumentNode(
        tag="characteristics",
        children=[_translate_node(node) for node in root.children_named(LEGACY_NODE_TAG)],
    )


def _translate_node(node: DocumentNode) -> DocumentNode:
    if node.field("rule-key") is not None:
        return _translate_requirement(node)

    attributes: dict[str, str] = {}
    for name in ("key", "name"):
        value = node.field(name)
        if value is not None:
            attributes[name] = value
    children = [_translate_node(child) for child in node.children_named(LEGACY_NODE_TAG)]
    return DocumentNode(tag="characteristic", attributes=attributes, children=children)


def _translate_requirement(node: DocumentNode) -> DocumentNode:
    attributes: dict[str, str] = {}
    repository = node.field("rule-repo") or node.field("rule-repository")
    if repository is not None:
        attributes["rule-repository"] = repository
    attributes["rule-key"] = node.field("rule-key") or ""

    for prop in node.children_named("prop"):
        prop_key = (prop.field("key") or "").lower()
        if prop_key not in _PROP_FIELDS:
            continue
        val_field, txt_field = _PROP_FIELDS[prop_key]
        val = prop.field("val")
        txt = prop.field("txt")
        if val_field is not None and val is not None:
            attributes[val_field] = val
        if txt_field is not None and txt is not None:
            attributes[txt_field] = txt

    return DocumentNode(tag="requirement", attributes=attributes)
