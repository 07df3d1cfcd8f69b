"""
Document Assembler

Builds output document headers and stitches per-node results into the
final document.
"""

import logging
from typing import Dict, Optional

from ..config import ConverterConfig
from ..constants import DTDLDefaults
from ..dtdl.dtdl_models import DTDLComponent, DTDLContext, DTDLInterface
from ..sdf.sdf_models import SDFDocument, SDFInfo, SDFObject, SDFThing
from .identifiers import NamespaceTable, fix_name

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Header construction and merging for both output dialects."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    # -------------------------------------------------------------------------
    # SDF output
    # -------------------------------------------------------------------------

    def sdf_info(self, name: str) -> SDFInfo:
        return SDFInfo(
            title=f"{self.config.title_prefix} {name}".strip(),
            version=self.config.sdf_version,
            copyright=self.config.copyright,
            license=self.config.license,
        )

    def sdf_document(
        self,
        name: str,
        table: NamespaceTable,
        *,
        objects: Optional[Dict[str, SDFObject]] = None,
        things: Optional[Dict[str, SDFThing]] = None,
        source: Optional[str] = None,
    ) -> SDFDocument:
        """Wrap translated nodes with the info block and namespace table."""
        return SDFDocument(
            info=self.sdf_info(name),
            namespace=dict(table.prefixes),
            default_namespace=table.default_prefix or None,
            objects=dict(objects or {}),
            things=dict(things or {}),
            source=source,
        )

    def merge_objects(self, root: SDFDocument, objects: Dict[str, SDFObject]) -> None:
        """
        Add sibling objects to the root document.

        Objects go into the root's Thing when it has one, otherwise next to
        the root object in the top-level ``sdfObject`` map.
        """
        target = next(iter(root.things.values())).objects if root.things else root.objects
        for name, obj in objects.items():
            if name in target:
                logger.warning(f"sdfObject '{name}' already present in the root document, replacing it")
            target[name] = obj

    # -------------------------------------------------------------------------
    # DTDL output
    # -------------------------------------------------------------------------

    def interface(
        self,
        dtmi: str,
        name: str,
        label: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DTDLInterface:
        """An empty Interface carrying the header fields."""
        if description:
            description = description[:DTDLDefaults.MAX_DESCRIPTION_LENGTH]
        return DTDLInterface(
            dtmi=dtmi,
            context=DTDLContext.from_json(self.config.dtdl_context),
            display_name=label or name,
            description=description,
        )

    def component(self, name: str, schema: str) -> DTDLComponent:
        return DTDLComponent(name=fix_name(name), schema=schema)
