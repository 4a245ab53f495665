"""Serializers: structure-builder XML for a taxonomy tree, mapping CSV for a membership table."""

import csv
from xml.etree import ElementTree as ET

import pandas as pd

from domain.membership.resolver import EXTRA_OUT_COLUMNS, HandleResolver, extra_fields
from domain.membership.table import ITEM_COL, MembershipTable
from domain.rows import VALUE_DELIMITER
from domain.taxonomy.node import TaxonomyNode, TaxonomyTree

XML_ROOT_ELEMENT = "import_structure"
COLLECTIONS_OUT_COL = "col_hdls"
OUT_COLUMNS = (ITEM_COL, COLLECTIONS_OUT_COL)


def _node_element(tree: TaxonomyTree, node: TaxonomyNode) -> ET.Element:
    el = ET.Element(node.kind.value)
    ET.SubElement(el, "name").text = node.name
    for attr, text in node.attributes.items():
        ET.SubElement(el, attr).text = text
    for child in tree.children(node):
        el.append(_node_element(tree, child))
    return el


def structure_to_xml(tree: TaxonomyTree, *, indent: str = "  ") -> str:
    """
    Render the tree for the repository structure-builder:

        <import_structure>
          <community>
            <name>...</name>
            <community> ... <collection><name>...</name></collection> ... </community>
          </community>
        </import_structure>
    """
    root = ET.Element(XML_ROOT_ELEMENT)
    root.append(_node_element(tree, tree.root))
    ET.indent(root, space=indent)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def membership_to_frame(
    table: MembershipTable,
    resolver: HandleResolver | None = None,
    delimiter: str = VALUE_DELIMITER,
) -> pd.DataFrame:
    columns = list(OUT_COLUMNS) + (list(EXTRA_OUT_COLUMNS) if resolver is not None else [])
    records: list[dict[str, str]] = []
    for item_id, cols in table:
        record = {ITEM_COL: item_id, COLLECTIONS_OUT_COL: delimiter.join(cols.as_list())}
        if resolver is not None:
            record.update(extra_fields(resolver, item_id, cols, delimiter))
        records.append(record)
    return pd.DataFrame(records, columns=columns)


def membership_to_csv(
    table: MembershipTable,
    resolver: HandleResolver | None = None,
    delimiter: str = VALUE_DELIMITER,
) -> str:
    """Two columns (item_hdl, col_hdls) sorted by item, owner first; extra columns when a resolver is given."""
    df = membership_to_frame(table, resolver, delimiter)
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
