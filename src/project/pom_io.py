"""Reading and writing ``pom.xml`` descriptors.

Only the elements this tool manages are mapped onto
:class:`ProjectDescriptor`; everything else in an existing file (dependencies,
build section, comments) is kept in the loaded XML tree and written back
untouched.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Optional, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import ParentRef, ProjectDescriptor

logger = logging.getLogger(__name__)

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Canonical order of the top-level elements this module may insert.
_ELEMENT_ORDER = [
    "modelVersion",
    "parent",
    "groupId",
    "artifactId",
    "version",
    "packaging",
    "name",
    "description",
    "url",
    "properties",
]

ET.register_namespace("", Constants.POM_NAMESPACE)
ET.register_namespace("xsi", XSI_NAMESPACE)

PathLike = Union[str, os.PathLike]


def _namespace_of(root: ET.Element) -> Optional[str]:
    if isinstance(root.tag, str) and root.tag.startswith("{"):
        return root.tag[1:].split("}", 1)[0]
    return None


def _qname(ns: Optional[str], tag: str) -> str:
    return f"{{{ns}}}{tag}" if ns else tag


def _local_name(element: ET.Element) -> Optional[str]:
    # Comments and processing instructions carry a factory function as tag
    if not isinstance(element.tag, str):
        return None
    return element.tag.rsplit("}", 1)[-1]


def _find_child(parent: ET.Element, qname: str) -> Optional[ET.Element]:
    for child in parent:
        if child.tag == qname:
            return child
    return None


def _child_text(parent: Optional[ET.Element], ns: Optional[str], tag: str) -> Optional[str]:
    if parent is None:
        return None
    node = _find_child(parent, _qname(ns, tag))
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None


def _read_parent(root: ET.Element, ns: Optional[str]) -> Optional[ParentRef]:
    node = _find_child(root, _qname(ns, "parent"))
    if node is None:
        return None
    return ParentRef(
        group_id=_child_text(node, ns, "groupId"),
        artifact_id=_child_text(node, ns, "artifactId"),
        version=_child_text(node, ns, "version"),
        relative_path=_child_text(node, ns, "relativePath"),
    )


def _read_properties(root: ET.Element, ns: Optional[str]) -> Dict[str, str]:
    node = _find_child(root, _qname(ns, "properties"))
    if node is None:
        return {}
    props = {}
    for child in node:
        name = _local_name(child)
        if name:
            props[name] = (child.text or "").strip()
    return props


def parse_pom(path: PathLike) -> ProjectDescriptor:
    """Parse an existing descriptor.

    Raises:
        OSError: When the file cannot be read.
        xml.etree.ElementTree.ParseError: When the file is not well-formed.
    """
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    with open(path, "rb") as fh:
        tree = ET.parse(fh, parser=parser)
    root = tree.getroot()
    ns = _namespace_of(root)

    descriptor = ProjectDescriptor(
        artifact_id=_child_text(root, ns, "artifactId"),
        group_id=_child_text(root, ns, "groupId"),
        version=_child_text(root, ns, "version"),
        packaging=_child_text(root, ns, "packaging"),
        model_version=_child_text(root, ns, "modelVersion") or Constants.MODEL_VERSION,
        parent=_read_parent(root, ns),
        properties=_read_properties(root, ns),
        element=root,
    )
    if is_debug_enabled(logger):
        logger.debug("Loaded descriptor", extra=extra_context(
            event="function_exit", component="pom_io", action="load",
            target=str(path), outcome="loaded", namespaced=ns is not None
        ))
    return descriptor


def load_pom(path: PathLike) -> Optional[ProjectDescriptor]:
    """Load a descriptor, returning None when the file does not exist."""
    if not os.path.isfile(path):
        return None
    return parse_pom(path)


def _new_root() -> ET.Element:
    root = ET.Element(_qname(Constants.POM_NAMESPACE, "project"))
    root.set(
        _qname(XSI_NAMESPACE, "schemaLocation"),
        f"{Constants.POM_NAMESPACE} {Constants.POM_SCHEMA_LOCATION}",
    )
    return root


def _insert_index(parent: ET.Element, tag: str, order) -> int:
    """Index right after the last child that sorts before ``tag``."""
    preceding = set(order[:order.index(tag)]) if tag in order else set(order)
    index = 0
    for i, child in enumerate(list(parent)):
        if _local_name(child) in preceding:
            index = i + 1
    return index


def _set_child(parent: ET.Element, ns: Optional[str], tag: str, value: Optional[str],
               order=None) -> Optional[ET.Element]:
    """Create, update or (when ``value`` is None) remove a text child."""
    node = _find_child(parent, _qname(ns, tag))
    if value is None:
        if node is not None:
            parent.remove(node)
        return None
    if node is None:
        node = ET.Element(_qname(ns, tag))
        if order:
            parent.insert(_insert_index(parent, tag, order), node)
        else:
            parent.append(node)
    node.text = value
    return node


def _write_parent(root: ET.Element, ns: Optional[str], parent: Optional[ParentRef]) -> None:
    node = _find_child(root, _qname(ns, "parent"))
    if parent is None:
        if node is not None:
            root.remove(node)
        return
    if node is None:
        node = ET.Element(_qname(ns, "parent"))
        root.insert(_insert_index(root, "parent", _ELEMENT_ORDER), node)
    order = ["groupId", "artifactId", "version", "relativePath"]
    _set_child(node, ns, "groupId", parent.group_id, order)
    _set_child(node, ns, "artifactId", parent.artifact_id, order)
    _set_child(node, ns, "version", parent.version, order)
    _set_child(node, ns, "relativePath", parent.relative_path, order)


def _write_properties(root: ET.Element, ns: Optional[str], properties: Dict[str, str]) -> None:
    if not properties:
        return
    node = _find_child(root, _qname(ns, "properties"))
    if node is None:
        node = ET.Element(_qname(ns, "properties"))
        root.insert(_insert_index(root, "properties", _ELEMENT_ORDER), node)
    for name, value in properties.items():
        _set_child(node, ns, name, value)


def to_element(descriptor: ProjectDescriptor) -> ET.Element:
    """Apply the descriptor's fields to its XML tree (creating one if needed)."""
    root = descriptor.element if descriptor.element is not None else _new_root()
    ns = _namespace_of(root)

    _set_child(root, ns, "modelVersion", descriptor.model_version, _ELEMENT_ORDER)
    _write_parent(root, ns, descriptor.parent)
    _set_child(root, ns, "groupId", descriptor.group_id, _ELEMENT_ORDER)
    _set_child(root, ns, "artifactId", descriptor.artifact_id, _ELEMENT_ORDER)
    _set_child(root, ns, "version", descriptor.version, _ELEMENT_ORDER)
    _set_child(root, ns, "packaging", descriptor.packaging, _ELEMENT_ORDER)
    _write_properties(root, ns, descriptor.properties)

    descriptor.element = root
    return root


def save_pom(descriptor: ProjectDescriptor, path: PathLike) -> None:
    """Write the descriptor to ``path``.

    Parent directories are created as needed. The file is written to a
    temporary sibling first and moved into place, so a failed write never
    leaves a truncated descriptor behind.
    """
    target = Path(path)
    root = to_element(descriptor)
    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")

    target.parent.mkdir(parents=True, exist_ok=True)
    mode = stat.S_IMODE(os.stat(target).st_mode) if target.exists() else 0o644
    fd, tmp_name = tempfile.mkstemp(prefix=".pom-", suffix=".xml", dir=str(target.parent))
    try:
        with os.fdopen(fd, "wb") as fh:
            tree.write(fh, encoding="UTF-8", xml_declaration=True)
            fh.write(b"\n")
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            logger.debug("Failed to remove temp file: %s", tmp_name)
        raise

    if is_debug_enabled(logger):
        logger.debug("Saved descriptor", extra=extra_context(
            event="function_exit", component="pom_io", action="save",
            target=str(target), outcome="written"
        ))
