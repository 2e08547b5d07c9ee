"""Relation taxonomy and per-process relation rules for process edges."""

from __future__ import annotations

from typing import Final

DEFAULT_RELATION: Final[str] = "interacts_with"
FALLBACK_CATEGORY: Final[str] = "other"

CATEGORIES: Final[tuple[str, ...]] = (
    "hierarchical",
    "legislative",
    "appointment",
    "financial",
    "review",
    "judicial",
    "electoral",
    "civic",
    "communication",
    FALLBACK_CATEGORY,
)

RELATION_CATEGORIES: Final[dict[str, str]] = {
    "reports_to": "hierarchical",
    "oversees": "hierarchical",
    "supervises": "hierarchical",
    "proposes_to": "legislative",
    "submits_to": "legislative",
    "passes_to": "legislative",
    "refers_to": "legislative",
    "approves": "legislative",
    "vetoes": "legislative",
    "enacts": "legislative",
    "authorizes": "legislative",
    "appoints": "appointment",
    "nominates": "appointment",
    "confirms": "appointment",
    "funds": "financial",
    "allocates_to": "financial",
    "awards_to": "financial",
    "budgets_for": "financial",
    "solicits": "financial",
    "reviews": "review",
    "monitors": "review",
    "audits": "review",
    "investigates": "review",
    "presides_over": "judicial",
    "prosecutes": "judicial",
    "adjudicates": "judicial",
    "elects": "electoral",
    "comments_to": "civic",
    "petitions": "civic",
    "advocates_to": "civic",
    "publishes_to": "communication",
    "notifies": "communication",
}

# Keys are "source→target" using bare ids; namespaced keys are tried first.
PROCESS_RELATION_RULES: Final[dict[str, dict[str, str]]] = {
    "ulurp": {
        "DCP→community_boards": "submits_to",
        "community_boards→borough_presidents": "submits_to",
        "borough_presidents→city_council": "submits_to",
        "city_council→mayor_nyc": "passes_to",
    },
    "city_budget": {
        "departments→OMB": "reports_to",
        "OMB→mayor_nyc": "submits_to",
        "mayor_nyc→city_council": "proposes_to",
        "city_council→mayor_nyc": "passes_to",
        "mayor_nyc→comptroller": "submits_to",
    },
    "charter_revision": {
        "mayor_nyc→charter_revision_commission": "appoints",
        "city_council→charter_revision_commission": "appoints",
        "charter_revision_commission→voters": "submits_to",
    },
    "local_law": {
        "city_council_member→city_council": "proposes_to",
        "city_council→mayor_nyc": "passes_to",
        "mayor_nyc→administrative_code": "enacts",
        "city_council→administrative_code": "enacts",
    },
    "agency_rulemaking": {
        "departments→mayor_office_operations": "submits_to",
        "mayor_office_operations→public_nyc": "publishes_to",
        "public_nyc→departments": "comments_to",
        "departments→city_council": "reports_to",
        "departments→rules_of_city": "enacts",
    },
    "mayoral_appointments": {
        "mayor_nyc→city_council": "nominates",
        "city_council→mayor_nyc": "confirms",
        "mayor_nyc→departments": "appoints",
    },
    "procurement": {
        "departments→comptroller": "submits_to",
        "comptroller→departments": "approves",
        "departments→vendors": "solicits",
        "vendors→departments": "submits_to",
        "MOCS→departments": "reviews",
    },
    "nys_budget": {
        "state_agencies→division_of_budget": "reports_to",
        "division_of_budget→governor_ny": "submits_to",
        "governor_ny→state_assembly": "proposes_to",
        "governor_ny→state_senate": "proposes_to",
        "state_assembly→governor_ny": "passes_to",
        "state_senate→governor_ny": "passes_to",
        "governor_ny→state_comptroller": "submits_to",
    },
    "judicial_appointment": {
        "commission_on_judicial_nomination→governor_ny": "nominates",
        "governor_ny→state_senate": "nominates",
    },
    "bond_act": {
        "state_legislature→governor_ny": "passes_to",
        "governor_ny→attorney_general": "submits_to",
        "attorney_general→voters_ny": "publishes_to",
    },
    "home_rule": {
        "city_council→mayor_nyc": "submits_to",
        "mayor_nyc→state_assembly": "submits_to",
        "mayor_nyc→state_senate": "submits_to",
        "state_assembly→state_senate": "passes_to",
        "state_senate→governor_ny": "passes_to",
    },
    "mayoral_control_schools": {
        "governor_ny→state_assembly": "proposes_to",
        "governor_ny→state_senate": "proposes_to",
        "mayor_nyc→state_assembly": "advocates_to",
        "mayor_nyc→state_senate": "advocates_to",
        "state_assembly→governor_ny": "passes_to",
        "state_senate→governor_ny": "passes_to",
        "governor_ny→DOE": "authorizes",
    },
    "state_rulemaking": {
        "state_agencies→governor_ny": "submits_to",
        "governor_ny→public_ny": "publishes_to",
        "public_ny→state_agencies": "comments_to",
        "state_agencies→state_legislature": "reports_to",
    },
    "federal_budget": {
        "federal_agencies→omb": "reports_to",
        "omb→president": "submits_to",
        "president→congress": "submits_to",
        "congress→appropriations_committees": "refers_to",
        "appropriations_committees→president": "passes_to",
    },
    "federal_rulemaking": {
        "agencies→oira": "submits_to",
        "oira→public": "publishes_to",
        "public→agencies": "comments_to",
        "agencies→congress": "reports_to",
    },
    "impeachment": {
        "house_of_representatives→house_judiciary_committee": "refers_to",
        "house_judiciary_committee→house_of_representatives": "reports_to",
        "house_of_representatives→senate": "submits_to",
        "senate→chief_justice": "presides_over",
    },
    "federal_grant": {
        "federal_agencies→subnational_governments": "publishes_to",
        "subnational_governments→omb": "submits_to",
        "omb→federal_agencies": "reviews",
        "subnational_governments→oversight": "reports_to",
    },
}
