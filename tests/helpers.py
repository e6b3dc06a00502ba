"""
Builders for small OWL/XML documents used across the tests
"""

BASE = "http://example.org/farm"


def owx(*parts: str) -> str:
    return (
        '<?xml version="1.0"?>\n'
        f'<Ontology xmlns="http://www.w3.org/2002/07/owl#" xml:base="{BASE}" ontologyIRI="{BASE}">\n'
        f'    <Prefix name="" IRI="{BASE}#"/>\n'
        '    <Prefix name="rdfs" IRI="http://www.w3.org/2000/01/rdf-schema#"/>\n'
        + "\n".join(parts)
        + "\n</Ontology>\n"
    )


def label(name: str, text: str) -> str:
    return (
        "<AnnotationAssertion>"
        '<AnnotationProperty abbreviatedIRI="rdfs:label"/>'
        f"<IRI>#{name}</IRI><Literal>{text}</Literal>"
        "</AnnotationAssertion>"
    )


def member(individual: str, cls: str) -> str:
    return (
        "<ClassAssertion>"
        f'<Class IRI="#{cls}"/><NamedIndividual IRI="#{individual}"/>'
        "</ClassAssertion>"
    )


def restriction(individual: str, prop: str, target_class: str) -> str:
    return (
        "<ClassAssertion><ObjectSomeValuesFrom>"
        f'<ObjectProperty IRI="#{prop}"/><Class IRI="#{target_class}"/>'
        f'</ObjectSomeValuesFrom><NamedIndividual IRI="#{individual}"/></ClassAssertion>'
    )


def fact(subject: str, prop: str, target: str) -> str:
    return (
        "<ObjectPropertyAssertion>"
        f'<ObjectProperty IRI="#{prop}"/>'
        f'<NamedIndividual IRI="#{subject}"/><NamedIndividual IRI="#{target}"/>'
        "</ObjectPropertyAssertion>"
    )


def vocabulary() -> list:
    """Labels for the Crop class, the tag vocabularies and the crop properties"""
    names = [
        "Crop", "Clay", "Loam", "Sandy", "ClayLoam", "Tropical", "Humid", "Dry",
        "Moderate", "High", "Medium", "Low",
        "growsIn", "suitableFor", "hasMarketValue", "hasSustainabilityScore",
    ]
    return [label(name, name) for name in names]
