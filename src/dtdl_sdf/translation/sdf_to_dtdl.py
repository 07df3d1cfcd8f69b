"""
SDF to DTDL Converter

Walks an SDF document and produces one DTDL Interface per sdfObject and
per sdfThing:

- sdfProperty -> Property, sdfEvent -> Telemetry, sdfAction -> Command,
  sdfRelation -> Relationship, sdfRef -> extends.
- An sdfThing becomes an Interface with one Component per child Object or
  Thing; the children are then converted in turn, depth first.

Thing nesting is assumed to be a tree (which is all JSON input can
express). Identifiers are unique within one document: an Object or Thing
whose name was already used is qualified with the name of its parent Thing.
Interfaces are appended to the output list in visit order:
top-level Objects first, then each Thing followed by its descendants.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Union

from ..config import ConverterConfig
from ..dtdl.dtdl_models import DTDLInterface, DTDLRelationship
from ..sdf.sdf_models import SDFData, SDFDocument, SDFObject, SDFRelation, SDFThing
from ..sdf.sdf_parser import SDFParser
from .affordances import AffordanceTranslator
from .assembler import DocumentAssembler
from .identifiers import fix_name, identifier_from_reference, split_qualified_id

logger = logging.getLogger(__name__)

SDFInput = Union[str, bytes, Dict[str, Any], SDFDocument]


class SDFToDTDLConverter:
    """
    Convert SDF documents to DTDL Interfaces.

    Example usage:
        converter = SDFToDTDLConverter()
        interfaces = converter.convert(json_text)
        for interface in interfaces:
            print(interface["@id"])
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()
        self.translator = AffordanceTranslator(self.config)
        self.assembler = DocumentAssembler(self.config)

    def convert(
        self,
        document: SDFInput,
        dtdl_set: Optional[List[Dict[str, Any]]] = None,
        source: str = "<input>",
    ) -> List[Dict[str, Any]]:
        """
        Convert one SDF document to a list of DTDL Interface documents.

        When ``dtdl_set`` is given, the new Interfaces are appended to it and
        the same list is returned.
        """
        if not isinstance(document, SDFDocument):
            document = SDFParser(source).load_document(document)

        output = dtdl_set if dtdl_set is not None else []
        output.extend(interface.to_dict() for interface in self.translate(document))
        return output

    def translate(self, document: SDFDocument) -> List[DTDLInterface]:
        """Translate a parsed SDF document into Interface models."""
        interfaces: List[DTDLInterface] = []
        taken: Set[str] = set()
        for name, obj in document.objects.items():
            dtmi = self._claim(self._identifier(f"#/sdfObject/{name}", document), None, taken)
            interfaces.append(self._object_interface(name, obj, document, dtmi))
        for name, thing in document.things.items():
            dtmi = self._claim(self._identifier(f"#/sdfThing/{name}", document), None, taken)
            self._thing_interfaces(name, thing, document, interfaces, dtmi, taken)
        return interfaces

    # -------------------------------------------------------------------------
    # Graph walk
    # -------------------------------------------------------------------------

    def _object_interface(
        self,
        name: str,
        obj: SDFObject,
        document: SDFDocument,
        dtmi: str,
    ) -> DTDLInterface:
        interface = self.assembler.interface(
            dtmi,
            name,
            obj.label,
            obj.description,
        )
        definitions = {**document.data, **obj.data}
        self._add_affordances(interface, obj.properties, obj.actions, obj.events, definitions)

        for relation_name, relation in obj.relations.items():
            interface.contents.append(self._relationship(relation_name, relation, document))

        if obj.sdf_ref:
            if len(obj.sdf_ref) > 1:
                logger.warning(
                    f"sdfObject '{name}' references {len(obj.sdf_ref)} definitions; "
                    f"only '{obj.sdf_ref[0]}' is kept as extends"
                )
            interface.extends = [self._identifier(obj.sdf_ref[0], document)]
        return interface

    def _thing_interfaces(
        self,
        name: str,
        thing: SDFThing,
        document: SDFDocument,
        interfaces: List[DTDLInterface],
        dtmi: str,
        taken: Set[str],
    ) -> None:
        interface = self.assembler.interface(
            dtmi,
            name,
            thing.label,
            thing.description,
        )
        self._add_affordances(
            interface, thing.properties, thing.actions, thing.events,
            {**document.data, **thing.data},
        )
        object_ids = {
            object_name: self._claim(self._identifier(f"#/sdfObject/{object_name}", document), name, taken)
            for object_name in thing.objects
        }
        thing_ids = {
            child_name: self._claim(self._identifier(f"#/sdfThing/{child_name}", document), name, taken)
            for child_name in thing.things
        }
        for object_name, object_id in object_ids.items():
            interface.contents.append(self.assembler.component(object_name, object_id))
        for child_name, child_id in thing_ids.items():
            interface.contents.append(self.assembler.component(child_name, child_id))
        interfaces.append(interface)

        for object_name, obj in thing.objects.items():
            interfaces.append(self._object_interface(object_name, obj, document, object_ids[object_name]))
        for child_name, child in thing.things.items():
            self._thing_interfaces(child_name, child, document, interfaces, thing_ids[child_name], taken)

    def _add_affordances(
        self,
        interface: DTDLInterface,
        properties: Dict[str, Any],
        actions: Dict[str, Any],
        events: Dict[str, Any],
        definitions: Dict[str, SDFData],
    ) -> None:
        for prop in properties.values():
            interface.contents.append(self.translator.property_to_dtdl(prop, definitions))
        for action in actions.values():
            interface.contents.append(self.translator.action_to_dtdl(action, definitions))
        for event in events.values():
            interface.contents.append(self.translator.event_to_dtdl(event, definitions))

    def _relationship(self, name: str, relation: SDFRelation, document: SDFDocument) -> DTDLRelationship:
        return DTDLRelationship(
            name=fix_name(name),
            target=self._identifier(relation.target, document) if relation.target else None,
            display_name=relation.label,
            description=self.translator.truncate(relation.description),
        )

    def _identifier(self, reference: str, document: SDFDocument) -> str:
        return identifier_from_reference(
            reference,
            document.namespace,
            document.default_namespace,
            head=self.config.namespace_head,
            id_prefix=self.config.id_prefix,
            version=self.config.dtdl_version,
        )

    @staticmethod
    def _claim(dtmi: str, owner: Optional[str], taken: Set[str]) -> str:
        """Reserve ``dtmi``, qualifying it with ``owner`` (then a counter) when already taken."""
        candidate = dtmi
        qid = split_qualified_id(dtmi)
        if candidate in taken and owner:
            path = (*qid.namespace_path, fix_name(owner))
            candidate = f"{':'.join(path)}:{qid.short_name};{qid.version}"
        else:
            path = qid.namespace_path
        counter = 2
        while candidate in taken:
            candidate = f"{':'.join(path)}:{qid.short_name}_{counter};{qid.version}"
            counter += 1
        if candidate != dtmi:
            logger.warning(f"Identifier {dtmi} is already used in this document, emitting {candidate}")
        taken.add(candidate)
        return candidate
