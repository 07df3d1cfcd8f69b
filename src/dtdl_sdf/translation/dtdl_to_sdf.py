"""
DTDL to SDF Converter

Walks a DTDL Interface and produces an SDF document:

- Property -> sdfProperty, Telemetry -> sdfEvent, Command -> sdfAction
  (+ sdfData), Relationship -> sdfRelation, extends -> sdfRef.
- An Interface with more than one Component becomes an sdfThing whose
  objects are the Interface itself plus one referencing entry per
  Component. Otherwise the Interface becomes a single sdfObject.

Batch mode converts several Interfaces with a shared ConversionContext:
the first document is the root, and later documents are kept only when
the root (or an already kept document) names them as a Component schema.
Kept documents share the root document's namespace table, so their
references are built against the root's default namespace.
Callers must pass the root first; nothing checks the order.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..config import ConverterConfig
from ..constants import SDFDefaults
from ..exceptions import DocumentParseError
from ..dtdl.dtdl_models import (
    DTDLCommand,
    DTDLComponent,
    DTDLInterface,
    DTDLProperty,
    DTDLRelationship,
    DTDLTelemetry,
    resolve_localized,
)
from ..dtdl.dtdl_parser import DTDLParser
from ..sdf.sdf_models import SDFDocument, SDFObject, SDFRelation, SDFThing
from .affordances import AffordanceTranslator
from .assembler import DocumentAssembler
from .context import BatchStatus, ConversionContext
from .identifiers import (
    NamespaceTable,
    QualifiedIdentifier,
    resolve_extensions,
    split_qualified_id,
)

logger = logging.getLogger(__name__)

DTDLInput = Union[str, bytes, Dict[str, Any], List[Any], DTDLInterface]

# Appended to a Component whose name collides with its Interface's object
COMPONENT_SUFFIX = "_component"


class DTDLToSDFConverter:
    """
    Convert DTDL Interfaces to SDF documents.

    Example usage:
        converter = DTDLToSDFConverter()
        sdf = converter.convert(json_text)

        merged = converter.convert_batch([root_text, component_text])
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()
        self.translator = AffordanceTranslator(self.config)
        self.assembler = DocumentAssembler(self.config)
        self.parser = DTDLParser(strict_mode=True)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def convert(
        self,
        document: DTDLInput,
        context: Optional[ConversionContext] = None,
        source: str = "<input>",
    ) -> Optional[Dict[str, Any]]:
        """
        Convert one DTDL document.

        Without a context the full SDF document is returned. With a context
        the first call produces (and stores) the root document; later calls
        return the ``sdfObject`` map merged into the root, or None when the
        Interface is not a required component.
        """
        interface = self._load(document, source)

        if context is None:
            return self.translate(interface).to_dict()

        if not context.has_root:
            context.root = self.translate(interface, context)
            self._require_components(interface, context)
            context.record(interface.dtmi, BatchStatus.ROOT, source)
            return context.root.to_dict()

        if not context.is_required(interface.dtmi):
            context.record(interface.dtmi, BatchStatus.DROPPED, source)
            return None

        sibling = self.translate(interface, context)
        self._require_components(interface, context)
        objects = sibling.objects
        if sibling.things:
            objects = next(iter(sibling.things.values())).objects
        self.assembler.merge_objects(context.root, objects)
        context.record(interface.dtmi, BatchStatus.MERGED, source)
        return {name: obj.to_dict() for name, obj in objects.items()}

    def convert_batch(
        self,
        documents: Iterable[DTDLInput],
        context: Optional[ConversionContext] = None,
        sources: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """
        Convert a root document and its candidate components into one SDF document.

        Raises:
            DocumentParseError: if ``documents`` is empty.
        """
        context = context if context is not None else ConversionContext()
        for index, document in enumerate(documents):
            source = sources[index] if sources and index < len(sources) else f"<input {index}>"
            self.convert(document, context, source)

        if context.root is None:
            raise DocumentParseError("No DTDL documents to convert")
        return context.root.to_dict()

    # -------------------------------------------------------------------------
    # Graph walk
    # -------------------------------------------------------------------------

    def translate(
        self,
        interface: DTDLInterface,
        context: Optional[ConversionContext] = None,
    ) -> SDFDocument:
        """Translate a parsed Interface into an SDF document model."""
        head = self.config.namespace_head
        qid = split_qualified_id(interface.dtmi)
        table = self._namespace_table(qid, context)

        root = SDFObject(
            name=qid.short_name,
            description=resolve_localized(interface.description) or resolve_localized(interface.comment),
        )
        root.sdf_ref = resolve_extensions(interface.extends, table, head)

        components: Dict[str, SDFObject] = {}

        for content in interface.contents:
            if isinstance(content, DTDLProperty):
                root.properties[content.name] = self.translator.property_to_sdf(content)
            elif isinstance(content, DTDLTelemetry):
                root.events[content.name] = self.translator.telemetry_to_sdf(content)
            elif isinstance(content, DTDLCommand):
                self._add_command(root, content)
            elif isinstance(content, DTDLComponent):
                key = content.name
                if key == root.name:
                    key = f"{content.name}{COMPONENT_SUFFIX}"
                    logger.warning(
                        f"{interface.dtmi}: Component '{content.name}' has the name of its "
                        f"Interface; emitting it as '{key}'"
                    )
                components[key] = self._component_entry(content)
            elif isinstance(content, DTDLRelationship):
                root.relations[content.name] = self._relation(content, table)

        if len(components) > 1:
            thing = SDFThing(
                name=qid.short_name,
                label=interface.resolved_display_name,
                description=root.description,
                objects={root.name: root, **components},
            )
            return self.assembler.sdf_document(
                qid.short_name, table, things={thing.name: thing}, source=interface.source_file
            )

        if components:
            logger.info(
                f"{interface.dtmi}: single Component '{next(iter(components))}' is not "
                f"embedded; it is only kept when converted in the same batch"
            )
        return self.assembler.sdf_document(
            qid.short_name, table, objects={root.name: root}, source=interface.source_file
        )

    def _add_command(self, root: SDFObject, command: DTDLCommand) -> None:
        action, data = self.translator.command_to_sdf(command)
        root.actions[command.name] = action
        for name, item in data.items():
            if name in root.data:
                logger.warning(
                    f"sdfData '{name}' of Command '{command.name}' replaces an earlier definition"
                )
            root.data[name] = item

    @staticmethod
    def _require_components(interface: DTDLInterface, context: ConversionContext) -> None:
        for component in interface.components:
            context.require(component.schema)

    def _component_entry(self, component: DTDLComponent) -> SDFObject:
        target = split_qualified_id(component.schema)
        return SDFObject(
            name=component.name,
            label=component.name,
            description=resolve_localized(component.description),
            sdf_ref=[f"#/sdfObject/{target.short_name}"],
        )

    def _relation(self, relationship: DTDLRelationship, table: NamespaceTable) -> SDFRelation:
        relation = SDFRelation(
            name=relationship.name,
            description=(
                resolve_localized(relationship.description)
                or resolve_localized(relationship.comment)
            ),
        )
        if relationship.target:
            relation.relation_type = f"{SDFDefaults.TERMS_PREFIX}:{SDFDefaults.RELATION_TYPE}"
            relation.target = table.object_reference(relationship.target, self.config.namespace_head)
        return relation

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load(self, document: DTDLInput, source: str) -> DTDLInterface:
        if isinstance(document, DTDLInterface):
            return document
        return self.parser.load_interface(document, source)

    def _namespace_table(
        self,
        qid: QualifiedIdentifier,
        context: Optional[ConversionContext],
    ) -> NamespaceTable:
        """
        Namespace table for one translation.

        Batch siblings share the root document's table, so their references
        are built against the root's default namespace and their prefixes
        land in the root's namespace map.
        """
        head = self.config.namespace_head
        if context is not None and context.has_root:
            table = NamespaceTable(
                prefixes=context.root.namespace,
                default_prefix=context.root.default_namespace,
            )
            table.register_identifier(qid, head)
            return table

        table = NamespaceTable()
        table.register(SDFDefaults.TERMS_PREFIX, SDFDefaults.TERMS_NAMESPACE)
        table.default_prefix = table.register_identifier(qid, head) or None
        return table
