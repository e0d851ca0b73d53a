"""JSON-LD context used to compact the AusPlots vocabulary graph.

The vocabulary source does not publish a machine-readable context, so this
one is maintained by hand. It only names the handful of properties the
dictionary reads.
"""

SKOS = "http://www.w3.org/2004/02/skos/core#"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"
DCTERMS = "http://purl.org/dc/terms/"

COMPACTION_CONTEXT: dict = {
    "prefLabel": f"{SKOS}prefLabel",
    "notation": f"{SKOS}notation",
    "label": f"{RDFS}label",
    "description": f"{DCTERMS}description",
    "definition": f"{SKOS}definition",
    "member": {
        "@id": f"{SKOS}member",
        "@type": "@id",
    },
}
