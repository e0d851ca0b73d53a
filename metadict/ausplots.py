"""AusPlots controlled-vocabulary tables.

Identifiers are concepts in the AusPlots categorical variable vocabulary
(http://linked.data.gov.au/def/ausplots-cv). Output codes are the column
names used by the ausplotsR package.
"""

from typing import Optional

from metadict.aliases import Alias, build_alias_table
from metadict.tables import VocabularyTables

CV = "http://linked.data.gov.au/def/ausplots-cv"

CATEGORICAL_VARIABLES_CONTAINER_ID = f"{CV}/55e652ef-b1f9-448a-97d4-a28cfc74e7c4"

BIOREGION_NAME_ID = f"{CV}/a9754a72-c2f7-4a9d-9686-9df78fb65e62"
OBSERVER_ID = f"{CV}/f06cad16-dce2-412a-9e47-1834b483b8db"
STATE_ID = f"{CV}/c27df9ec-ef2a-482c-b79f-22b03efcacd4"
DATUM_ID = f"{CV}/3b2c4499-9257-498d-a18f-6405e5ca8787"

MISCELLANEOUS_ID = f"{CV}/9dc8290e-ce1f-48b3-a6d3-78acf1f56b7b"
VEGETATION_STRATA_VALUES_ID = f"{CV}/1e3327d0-e572-4c6b-8836-b4e226adc089"

ALIASES = build_alias_table(
    {
        f"{CV}/e502f1db-b8fe-4e32-9a1a-f761b9e98029": ["point_id"],
        BIOREGION_NAME_ID: ["bioregion_name"],
        f"{CV}/5acbf972-3cf2-4516-9a07-1fa1b8a2acbd": ["coarse_frag_abund"],
        f"{CV}/b446ff51-dc76-472e-bb2f-19706a089b32": ["coarse_frag_shape"],
        f"{CV}/9a280139-f00e-45ab-b08e-93e3164b4bd2": ["coarse_frag_size"],
        DATUM_ID: [Alias(code="pit_marker_datum", label="Pit marker datum")],
        f"{CV}/f0f17aeb-8d72-4b17-9a13-f625cdc30c08": ["disturbance"],
        f"{CV}/bca813f6-9182-43a5-8975-8d804cc61b31": ["drainage_type"],
        f"{CV}/aa40dc68-706e-4273-a547-3235def21d1c": ["effervescence"],
        f"{CV}/23609456-c133-452f-a06c-feffbdedd64e": ["erosion_abundance"],
        f"{CV}/0b12c523-e44d-43ab-8b42-976e7d1fac1b": ["erosion_state"],
        f"{CV}/34c89174-82d6-421d-8d08-756292adc465": ["erosion_type"],
        f"{CV}/eae155c7-669c-463a-8d01-01b090472732": ["growth_form"],
        f"{CV}/1a250c12-c95e-401e-9f16-8bce83bd691d": ["landform_element"],
        f"{CV}/4f9e9fa9-5327-45fa-9ab2-be81e7a2a89c": ["landform_pattern"],
        f"{CV}/cb0c2aab-6556-4344-9d5d-5bd0ecab2267": [
            Alias(code="outcrop_lithology", label="Outcrop lithology"),
            Alias(code="other_outcrop_lithology", label="Other outcrop lithology"),
        ],
        f"{CV}/5b18e191-31f1-459b-90a0-31ee3f614846": [
            Alias(code="pit_marker_mga_zones", label="Pit marker MGA zone"),
        ],
        f"{CV}/222c85bc-a6f7-4e78-87ef-9684f513bcc6": ["microrelief"],
        f"{CV}/16b85cbf-7956-4131-bf21-2d9e7a08cb96": ["mottles_abundance"],
        f"{CV}/c9c9d4df-6342-45b8-ab99-b07496cadf1b": ["mottles_colour"],
        f"{CV}/b512f19f-f659-4e32-b9a0-18aa72c25333": ["mottles_size"],
        OBSERVER_ID: [
            Alias(code="observer_veg", label="Observer veg"),
            Alias(code="observer_soil", label="Observer soil"),
            Alias(code="described_by", label="Described by"),
            Alias(code="collected_by", label="Collected by"),
        ],
        f"{CV}/009e5822-4344-4b5a-832b-46a3adcf042f": ["pedality_fabric"],
        f"{CV}/c8029ec5-940f-48cc-b3d1-50cadf3dc2fd": ["pedality_grade"],
        f"{CV}/337b09de-0b39-43d8-b2f0-417e1085bf2e": ["pedality_type"],
        f"{CV}/32ce77a0-dc9e-459b-9c91-4da904dbe7d6": ["segregations_abundance"],
        f"{CV}/2ecd0e04-d5cd-4748-849a-ff6810567835": ["segregations_form"],
        f"{CV}/a58f8f2e-6067-48af-b0f7-c8c19c811ba2": ["segregations_nature"],
        f"{CV}/b2e65552-b85a-4c01-a953-7934bd65b84f": ["segregations_size"],
        f"{CV}/0968f477-fe5d-4c90-b4b3-71a41bcba3e2": ["texture_grade"],
        f"{CV}/55775cfc-eb1c-4151-904a-1654a2649799": ["texture_modifier"],
        f"{CV}/a7258bee-8f9f-4f0f-ae77-a5def5c22936": ["texture_qualifier"],
        STATE_ID: ["state"],
        f"{CV}/d6f16e28-0913-4b06-9919-c13d9a9f0832": [
            Alias(code="smallest_size_1", label="Smallest Size 1"),
            Alias(code="smallest_size_2", label="Smallest Size 2"),
        ],
        f"{CV}/b15f3b2b-99dd-4ec4-b1ad-15ee7ed1658e": ["substrate"],
        f"{CV}/9be3370e-6bce-4418-a4f5-ba3800951344": ["surface_soil_condition"],
        f"{CV}/fc51058d-ab4b-4875-9655-7356d1b6a009": ["surface_strew_size"],
    }
)

NON_VOCAB_VARIABLES = (
    (f"{CV}/5ff6bc93-0d26-420f-80de-a898d51962aa", "basal_area"),
    (f"{CV}/cde9be44-f208-4411-9f16-9dab96d4c425", "climatic_condition"),
    (f"{CV}/aa11e5f7-aec2-4e92-95b8-6332911f0c4e", "colour_when_dry"),
    (f"{CV}/7d6a1fdb-111a-4dbe-8534-a5e48d79750c", "colour_when_moist"),
    (f"{CV}/2ec446bb-a098-4016-9fca-80c667597bbe", "dead"),
    (f"{CV}/85a6a2b1-51e4-4fe4-9792-da54423ba3cf", "ec"),
    (f"{CV}/8b217978-1aec-4e4a-ac9d-b08a47ebf0a4", "height"),
    (f"{CV}/7f3ca1bc-ba41-49b6-adb9-05e640f89d79", "horizon"),
    (f"{CV}/bc8156c2-c2a7-4b2b-8ece-3f1959734d6e", "in_canopy_sky"),
    (f"{CV}/11eb41e9-4f8f-4998-8443-e2748d8081a0", "lower_depth"),
    (f"{CV}/7903d149-6fcd-4038-928c-4987b00e451e", "mass_flowering_event"),
    (f"{CV}/e8bde3f7-0c4f-442e-8e88-08273f57fec8", "ground_1_dominant"),
    (f"{CV}/e9aa8f39-4fb9-49fc-b48b-861c22d57971", "ground_2_dominant"),
    (f"{CV}/3e1d9d34-023a-47ae-9b2c-e07eeaaea2ce", "ground_3_dominant"),
    (f"{CV}/9f770911-7b5c-45c8-b35f-f6dbc7840659", "mid_1_dominant"),
    (f"{CV}/53f39410-6e5c-4555-81b4-ce0d48b22166", "mid_2_dominant"),
    (f"{CV}/d99a8ef8-bcac-4496-b3e6-5d0391e0c7c9", "mid_3_dominant"),
    (f"{CV}/69ed5cf9-e617-4f4a-bb13-899351317e52", "upper_1_dominant"),
    (f"{CV}/ef5bc0c0-8e17-4d33-a019-6c86c6ce7df0", "upper_2_dominant"),
    (f"{CV}/91d40b5f-aec1-4812-8277-a35af77c3caa", "upper_3_dominant"),
    (f"{CV}/686c8e7b-78ab-4094-8a38-733eefe21e0a", "ph"),
    (f"{CV}/b6049501-b90f-4ab0-b64b-dff4f588e3e4", "site_aspect"),
    (f"{CV}/8ad3966c-9f23-4df9-9c37-5b8cee679356", "site_slope"),
    (f"{CV}/ff69c254-e549-45e8-a320-e28ead5092c8", "vegetation_condition"),
)

_APC_APNI = "the Australian Plant Census (APC) and Australian Plant Names Index (APNI)"

# Columns added by the ausplotsR package itself; the vocabulary has no
# definition for them.
DOMAIN_ONLY_VARIABLES = (
    ("authorship", f"standardised author of taxonomic name from {_APC_APNI}"),
    ("family", f"plant family from {_APC_APNI}"),
    ("genus", f"plant genus from {_APC_APNI}"),
    ("genus_species", f"species level scientific name matched to {_APC_APNI}"),
    ("hits_unique", "unique point intercept hit identifier concatenation of transect and point_number"),
    ("infraspecific_epithet", f"epithet or name identifying infraspecific taxon matched to {_APC_APNI}"),
    ("infraspecific_rank", f"rank of infraspecific taxon matched to {_APC_APNI}"),
    ("published_in", f"taxonomic publication details from {_APC_APNI}"),
    ("rank", f"lowest applicable taxonomic rank from {_APC_APNI}"),
    (
        "site_unique",
        "unique site survey identifier concatenation of site_location_name and site_location_visit_ID",
    ),
    ("specific_epithet", f"epithet or name identifying species matched to {_APC_APNI}"),
    ("standardised_name", f"scientific name at lowest available taxonomic level matched to {_APC_APNI}"),
    ("taxa_group", f"major plant taxonomic group from {_APC_APNI}"),
    ("taxa_status", f"flag for accepted plant name from {_APC_APNI}"),
)


def ausplots_tables(container_id: Optional[str] = None) -> VocabularyTables:
    """Return the AusPlots tables, optionally with a different container identifier."""
    return VocabularyTables(
        container_id=container_id or CATEGORICAL_VARIABLES_CONTAINER_ID,
        cross_referenced_ids=(BIOREGION_NAME_ID, OBSERVER_ID, STATE_ID),
        ignore_ids=frozenset({MISCELLANEOUS_ID, VEGETATION_STRATA_VALUES_ID}),
        label_as_code_ids=frozenset({DATUM_ID}),
        aliases=ALIASES,
        non_vocab_variables=NON_VOCAB_VARIABLES,
        domain_only_variables=DOMAIN_ONLY_VARIABLES,
    )
