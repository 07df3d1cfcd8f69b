"""
sdfThing composer.

Builds an sdfThing document from a skeleton (``info``, ``namespace`` and
``defaultNamespace`` header) and a set of SDF documents whose sdfObject
definitions become the Thing's objects. The Thing is named after the
skeleton's ``info.title``.
"""

import logging
from typing import Any, Dict, Iterable

from ..constants import FileNames
from ..exceptions import DocumentParseError

logger = logging.getLogger(__name__)


def thing_file_name(base_name: str) -> str:
    """``sdfthing-<base_name>.sdf.json``"""
    return f"{FileNames.THING_PREFIX}{base_name}{FileNames.SDF_SUFFIX}"


def compose_thing(
    skeleton: Dict[str, Any],
    object_documents: Iterable[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Combine the sdfObject maps of ``object_documents`` into one sdfThing.

    Later documents override earlier ones on object name clashes. Documents
    without an ``sdfObject`` block are skipped with a warning.

    Raises:
        DocumentParseError: the skeleton is not an object or has no
            ``info.title``.
    """
    if not isinstance(skeleton, dict):
        raise DocumentParseError("Thing skeleton must be a JSON object")
    title = (skeleton.get("info") or {}).get("title")
    if not isinstance(title, str) or not title:
        raise DocumentParseError("Thing skeleton has no info.title")

    objects: Dict[str, Any] = {}
    for index, document in enumerate(object_documents):
        sdf_objects = document.get("sdfObject") if isinstance(document, dict) else None
        if not isinstance(sdf_objects, dict):
            logger.warning(f"Input document {index} has no sdfObject block, skipping")
            continue
        for name in sdf_objects:
            if name in objects:
                logger.warning(f"sdfObject '{name}' defined by more than one input, keeping the last")
        objects.update(sdf_objects)

    composed = dict(skeleton)
    composed["sdfThing"] = {title: {"sdfObject": objects}}
    return composed
