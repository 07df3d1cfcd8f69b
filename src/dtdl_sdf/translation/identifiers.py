"""
Identifier & Namespace Resolver

Parses and builds DTDL qualified identifiers (DTMIs) and SDF references,
and keeps the per-document namespace table.

A qualified identifier is a run of segments joined by ``:`` or ``;``. The
last two segments are always the short name and the version; everything
before them is the namespace path. The last namespace segment doubles as
the namespace prefix in SDF::

    dtmi:com:example:Thermostat;1
      namespace path  dtmi/com/example   (prefix "example")
      short name      Thermostat
      version         1

References are local JSON pointers (``#/sdfObject/Thermostat``) when the
target lives in the default namespace, otherwise CURIEs
(``example:#/sdfObject/Thermostat``).
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import DTDLDefaults, SDFDefaults
from ..exceptions import MalformedIdentifier

logger = logging.getLogger(__name__)

_SEGMENT_DELIMITERS = re.compile(r"[;:]")
_NAME_FIX = re.compile(DTDLDefaults.NAME_FIX_PATTERN)


@dataclass(frozen=True)
class QualifiedIdentifier:
    """A split DTMI-style identifier."""
    namespace_path: Tuple[str, ...]
    short_name: str
    version: str

    @property
    def namespace_prefix(self) -> str:
        """Last namespace segment, or '' for identifiers without a namespace."""
        return self.namespace_path[-1] if self.namespace_path else ""

    def namespace_uri(self, head: str = SDFDefaults.NAMESPACE_HEAD) -> str:
        return head + "/".join(self.namespace_path)


def split_qualified_id(identifier: object) -> QualifiedIdentifier:
    """
    Split a qualified identifier into namespace path, short name and version.

    Raises:
        MalformedIdentifier: fewer than two delimiter-separated segments,
            an empty short name, or a non-string input.
    """
    if not isinstance(identifier, str) or not identifier:
        raise MalformedIdentifier(identifier)

    segments = _SEGMENT_DELIMITERS.split(identifier)
    if len(segments) < 2 or not segments[-2]:
        raise MalformedIdentifier(identifier)

    namespace_path: List[str] = []
    for segment in segments[:-2]:
        namespace_path.extend(s for s in segment.split("/") if s)

    return QualifiedIdentifier(
        namespace_path=tuple(namespace_path),
        short_name=segments[-2],
        version=segments[-1],
    )


def fix_name(name: str) -> str:
    """Replace characters DTDL does not allow in names with underscores."""
    return _NAME_FIX.sub(DTDLDefaults.NAME_FIX_CHAR, name)


def build_reference(default_prefix: Optional[str], target_prefix: Optional[str], pointer: str) -> str:
    """
    Build a reference to ``pointer`` (e.g. ``sdfObject/Name``).

    Local pointer when the target shares the default namespace (or has
    none), CURIE otherwise.
    """
    if not target_prefix or target_prefix == default_prefix:
        return f"#/{pointer}"
    return f"{target_prefix}:#/{pointer}"


def parse_reference(reference: str) -> Tuple[Optional[str], List[str]]:
    """
    Split a reference into its namespace prefix and pointer segments.

    ``#/sdfObject/A`` -> (None, ["sdfObject", "A"])
    ``ns:#/sdfObject/A`` -> ("ns", ["sdfObject", "A"])
    ``ns:A`` -> ("ns", ["A"])
    """
    prefix: Optional[str] = None
    pointer = reference
    if not reference.startswith("#"):
        head, sep, tail = reference.partition(":")
        if sep:
            prefix, pointer = head, tail
    pointer = pointer.lstrip("#").strip("/")
    return prefix, [p for p in pointer.split("/") if p]


@dataclass
class NamespaceTable:
    """
    Prefix -> namespace URI mapping of one SDF document.

    The first registration of a prefix wins. Registering the same prefix
    with a different URI keeps the original mapping and logs a warning.
    """
    prefixes: Dict[str, str] = field(default_factory=dict)
    default_prefix: Optional[str] = None

    def register(self, prefix: str, uri: str) -> bool:
        """Insert ``prefix`` if absent. Returns True when an entry was added."""
        if not prefix:
            return False
        existing = self.prefixes.get(prefix)
        if existing is None:
            self.prefixes[prefix] = uri
            return True
        if existing != uri:
            logger.warning(
                f"Namespace prefix '{prefix}' already maps to {existing}; "
                f"ignoring conflicting URI {uri}"
            )
        return False

    def register_identifier(
        self,
        identifier: QualifiedIdentifier,
        head: str = SDFDefaults.NAMESPACE_HEAD,
    ) -> str:
        """Register the namespace of ``identifier`` and return its prefix."""
        prefix = identifier.namespace_prefix
        self.register(prefix, identifier.namespace_uri(head))
        return prefix

    def reference(self, target_prefix: Optional[str], pointer: str) -> str:
        return build_reference(self.default_prefix, target_prefix, pointer)

    def object_reference(
        self,
        identifier: str,
        head: str = SDFDefaults.NAMESPACE_HEAD,
    ) -> str:
        """Register the namespace of a DTMI and return a reference to its sdfObject."""
        qid = split_qualified_id(identifier)
        prefix = self.register_identifier(qid, head)
        return self.reference(prefix, f"sdfObject/{qid.short_name}")


def resolve_extensions(
    extends: Iterable[str],
    table: NamespaceTable,
    head: str = SDFDefaults.NAMESPACE_HEAD,
) -> List[str]:
    """
    Map inherited Interface identifiers to SDF references, in order.

    Each target namespace is registered in ``table`` before its reference
    is built.
    """
    return [table.object_reference(identifier, head) for identifier in extends]


def identifier_from_reference(
    reference: str,
    namespaces: Dict[str, str],
    default_prefix: Optional[str] = None,
    *,
    head: str = SDFDefaults.NAMESPACE_HEAD,
    id_prefix: str = DTDLDefaults.ID_PREFIX,
    version: str = DTDLDefaults.VERSION,
) -> str:
    """
    Rebuild a DTMI for the definition an SDF reference points at.

    Object references in namespaces whose URI starts with ``head`` were
    derived from DTMIs and are turned back into DTMI segments. Anything
    else, Things included, gets an identifier under ``id_prefix`` in the
    style ``<id_prefix>sdfobject:<Name>;<version>``. Things never carry a
    DTMI of their own; one built from their namespace would clash with the
    root Object named after the same Interface.
    """
    prefix, segments = parse_reference(reference)
    if not segments:
        raise MalformedIdentifier(reference)

    is_thing = segments[0] == "sdfThing"
    name = fix_name(segments[-1])
    uri = namespaces.get(prefix or default_prefix or "")
    if uri and uri.startswith(head) and not is_thing:
        path = [fix_name(p) for p in uri[len(head):].strip("/").split("/") if p]
        if path:
            if path[0] != "dtmi":
                path.insert(0, "dtmi")
            return ":".join(path + [name]) + ";" + version

    kind = DTDLDefaults.THING_SEGMENT if is_thing else DTDLDefaults.OBJECT_SEGMENT
    return f"{id_prefix}{kind}:{name};{version}"
