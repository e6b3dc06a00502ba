# agents/knowledge/ontology.py
"""
Crop fact extraction from an OWL/XML (.owx) ontology document

The document is flattened into three read-only structures:
- a label index (IRI -> rdfs:label)
- a class-membership index (individual IRI -> asserted class IRIs)
- an explicit edge list of (subject, property, target) object relations

Crops are the individuals asserted into the class labelled "Crop"; their
soil, climate, market and sustainability facts are read off their edges.
"""
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Union
from urllib.parse import urljoin

from agents.knowledge.models import Crop, SOIL_TYPES, CLIMATE_TYPES, LEVELS
from core.exceptions import OntologyError

logger = logging.getLogger(__name__)

XML_BASE_ATTR = "{http://www.w3.org/XML/1998/namespace}base"
RDFS_LABEL = "http://www.w3.org/2000/01/rdf-schema#label"

DEFAULT_PREFIXES = {
    "owl": "http://www.w3.org/2002/07/owl#",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "xml": "http://www.w3.org/XML/1998/namespace",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
}

CROP_CLASS_LABEL = "crop"
SOIL_LABELS = frozenset(SOIL_TYPES)
CLIMATE_LABELS = frozenset(CLIMATE_TYPES)
MARKET_VALUE_LABELS = frozenset(LEVELS)

GROWS_IN = "growsIn"
SUITABLE_FOR = "suitableFor"
HAS_MARKET_VALUE = "hasMarketValue"
HAS_SUSTAINABILITY_SCORE = "hasSustainabilityScore"
CROP_PROPERTIES = frozenset([GROWS_IN, SUITABLE_FOR, HAS_MARKET_VALUE, HAS_SUSTAINABILITY_SCORE])

DEFAULT_SOILS = ["Loam"]
DEFAULT_CLIMATES = ["Moderate"]


class Edge(NamedTuple):
    subject: str
    property: str
    target: str


def _local(tag: str) -> str:
    """Strip the XML namespace from a tag"""
    return tag.rsplit("}", 1)[-1]


def iri_fragment(iri: str) -> str:
    """Trailing name of an IRI: text after '#', else after the last '/'"""
    if "#" in iri:
        fragment = iri.rsplit("#", 1)[-1]
    else:
        fragment = iri.rstrip("/").rsplit("/", 1)[-1]
    return fragment or iri


class OntologyGraph:
    """Flattened, read-only view of an OWL/XML document"""

    def __init__(self):
        self.labels: Dict[str, str] = {}
        self.classes: Dict[str, List[str]] = {}
        self.edges: List[Edge] = []
        self._base = ""
        self._prefixes: Dict[str, str] = dict(DEFAULT_PREFIXES)

    # ---------- Parsing ----------

    @classmethod
    def from_string(cls, xml_text: Union[str, bytes]) -> "OntologyGraph":
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise OntologyError(f"Ontology document is not well-formed XML: {e}") from e

        graph = cls()
        graph._read(root)
        return graph

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "OntologyGraph":
        try:
            xml_bytes = Path(path).read_bytes()
        except OSError as e:
            raise OntologyError(f"Cannot read ontology file {path}: {e}") from e
        return cls.from_string(xml_bytes)

    def _read(self, root: ET.Element) -> None:
        if _local(root.tag) != "Ontology":
            raise OntologyError(f"Expected an OWL/XML <Ontology> root, found <{_local(root.tag)}>")

        self._base = root.get(XML_BASE_ATTR) or root.get("ontologyIRI") or ""

        # Prefixes first, abbreviated IRIs depend on them
        for child in root:
            if _local(child.tag) == "Prefix":
                self._prefixes[child.get("name", "")] = child.get("IRI", "")

        for child in root:
            kind = _local(child.tag)
            if kind == "AnnotationAssertion":
                self._read_annotation(child)
            elif kind == "ClassAssertion":
                self._read_class_assertion(child)
            elif kind == "ObjectPropertyAssertion":
                self._read_property_assertion(child)

    def _resolve(self, iri: Optional[str] = None, abbreviated: Optional[str] = None) -> Optional[str]:
        if abbreviated:
            prefix, _, name = abbreviated.partition(":")
            if prefix in self._prefixes:
                return self._prefixes[prefix] + name
            return abbreviated
        if not iri:
            return None
        iri = iri.strip()
        if "://" in iri or iri.startswith("urn:") or not self._base:
            return iri
        return urljoin(self._base, iri)

    def _entity_iri(self, element: Optional[ET.Element]) -> Optional[str]:
        """IRI of an entity element such as <Class IRI="..."/>"""
        if element is None:
            return None
        return self._resolve(element.get("IRI"), element.get("abbreviatedIRI"))

    def _first(self, parent: ET.Element, *kinds: str) -> Optional[ET.Element]:
        for child in parent:
            if _local(child.tag) in kinds:
                return child
        return None

    def _children(self, parent: ET.Element, kind: str) -> List[ET.Element]:
        return [child for child in parent if _local(child.tag) == kind]

    def _read_annotation(self, element: ET.Element) -> None:
        prop = self._entity_iri(self._first(element, "AnnotationProperty"))
        if prop != RDFS_LABEL:
            return

        subject_el = self._first(element, "IRI", "AbbreviatedIRI")
        literal_el = self._first(element, "Literal")
        if subject_el is None or literal_el is None or not subject_el.text:
            return

        if _local(subject_el.tag) == "IRI":
            subject = self._resolve(iri=subject_el.text)
        else:
            subject = self._resolve(abbreviated=subject_el.text.strip())

        label = (literal_el.text or "").strip()
        if subject and label:
            # Last label wins, earlier ones are overwritten
            self.labels[subject] = label

    def _read_class_assertion(self, element: ET.Element) -> None:
        individual = self._entity_iri(self._first(element, "NamedIndividual"))
        if not individual:
            return

        class_el = self._first(element, "Class")
        if class_el is not None:
            class_iri = self._entity_iri(class_el)
            if class_iri:
                self.classes.setdefault(individual, []).append(class_iri)
            return

        restriction = self._first(element, "ObjectSomeValuesFrom", "ObjectHasValue")
        if restriction is None:
            return

        prop = self._entity_iri(self._first(restriction, "ObjectProperty"))
        # Prefer a target individual (possibly inside ObjectOneOf), else a target class
        target_el = next(restriction.iterfind(".//{*}NamedIndividual"), None)
        if target_el is None:
            target_el = self._first(restriction, "Class")
        target = self._entity_iri(target_el)

        if prop and target:
            self.edges.append(Edge(individual, prop, target))

    def _read_property_assertion(self, element: ET.Element) -> None:
        prop = self._entity_iri(self._first(element, "ObjectProperty"))
        individuals = self._children(element, "NamedIndividual")
        if prop and len(individuals) == 2:
            subject, target = (self._entity_iri(el) for el in individuals)
            if subject and target:
                self.edges.append(Edge(subject, prop, target))

    # ---------- Queries ----------

    def find_class(self, label: str) -> Optional[str]:
        """First IRI (document order) whose label matches, case-insensitively"""
        wanted = label.lower()
        for iri, text in self.labels.items():
            if text.lower() == wanted:
                return iri
        return None

    def individuals_of(self, class_iri: str) -> List[str]:
        return [ind for ind, classes in self.classes.items() if class_iri in classes]

    def edges_from(self, subject: str) -> List[Edge]:
        return [edge for edge in self.edges if edge.subject == subject]

    def property_name(self, iri: str) -> Optional[str]:
        """Property label; unlabelled properties carry no crop facts"""
        return self.labels.get(iri)

    def target_label(self, iri: str) -> Optional[str]:
        """Direct label, else the label of the first labelled asserted class.

        When a target sits in several labelled classes the choice follows
        assertion order in the document.
        """
        label = self.labels.get(iri)
        if label:
            return label
        for class_iri in self.classes.get(iri, []):
            label = self.labels.get(class_iri)
            if label:
                return label
        return None

    def display_name(self, iri: str) -> str:
        return self.labels.get(iri) or iri_fragment(iri)


def _build_crop(graph: OntologyGraph, individual: str) -> Crop:
    name = graph.display_name(individual)
    soils: List[str] = []
    climates: List[str] = []
    market_value = "Medium"
    water_usage = "Medium"
    carbon_footprint = "Medium"

    for edge in graph.edges_from(individual):
        prop = graph.property_name(edge.property)
        if prop not in CROP_PROPERTIES:
            continue

        target = graph.target_label(edge.target)
        if not target:
            continue

        if prop == GROWS_IN and target in SOIL_LABELS and target not in soils:
            soils.append(target)
        if prop in (GROWS_IN, SUITABLE_FOR) and target in CLIMATE_LABELS and target not in climates:
            climates.append(target)
        if prop == HAS_MARKET_VALUE and target in MARKET_VALUE_LABELS:
            market_value = target
        if prop == HAS_SUSTAINABILITY_SCORE:
            lowered = target.lower()
            if "highwateruse" in lowered:
                water_usage = "High"
            if "lowwateruse" in lowered:
                water_usage = "Low"
            if "highcarbonfootprint" in lowered:
                carbon_footprint = "High"

    return Crop(
        id=name.lower(),
        name=name,
        suitableSoils=soils or list(DEFAULT_SOILS),
        suitableClimates=climates or list(DEFAULT_CLIMATES),
        waterUsage=water_usage,
        carbonFootprint=carbon_footprint,
        marketValue=market_value,
    )


def extract_crops(graph: OntologyGraph) -> List[Crop]:
    """Derive crop facts from a parsed ontology.

    Raises OntologyError when no "Crop" class exists or no individual is
    asserted into it.
    """
    crop_class = graph.find_class(CROP_CLASS_LABEL)
    if not crop_class:
        raise OntologyError("No crops derived: ontology has no class labelled 'Crop'")

    individuals = graph.individuals_of(crop_class)
    if not individuals:
        raise OntologyError("No crops derived: no individual is asserted as a Crop")

    crops = [_build_crop(graph, individual) for individual in individuals]
    logger.info(f"Derived {len(crops)} crops from ontology ({len(graph.edges)} property edges)")
    return crops


def load_crops(source: Union[str, Path]) -> List[Crop]:
    """Parse an .owx file and derive its crops"""
    return extract_crops(OntologyGraph.from_file(source))
