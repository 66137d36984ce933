"""
Type definitions for the extraction core.

Defines the document structure handed over by segmentation, the identifiers
used to file and look up reactions, and the outcome values reported by
reference resolution.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from lxml import etree

from reactionxref.chemistry.models import Chemical, ChemicalAliasPair, Reaction


class ReactionXrefError(Exception):
    """Base exception for the extraction core."""


class MissingProcedureError(ReactionXrefError):
    """An experimental section reached the parser without its procedure span."""


class ResolutionOutcome(Enum):
    """Result of one reference-resolution attempt."""
    RESOLVED = "resolved"
    NO_REFERENCE = "no_reference"                  # no reference span present
    SKIPPED = "skipped"                            # mention has its own structure
    AMBIGUOUS = "ambiguous"                        # more than one reference span
    UNINTERPRETABLE = "uninterpretable"            # procedure ids could not be read
    UNRESOLVED = "unresolved"                      # alias / section-step lookup missed
    REJECTED_NO_INCHI = "rejected_no_inchi"
    REJECTED_SHORTER_INCHI = "rejected_shorter_inchi"
    SUB_STEP_PRODUCT = "sub_step_product"


@dataclass(frozen=True)
class SectionAndStepIdentifier:
    """
    Section and optional step label of a procedure, e.g. ("3", "a").

    A step identifier of None denotes the section as a whole.
    """
    section_identifier: Optional[str]
    step_identifier: Optional[str] = None


@dataclass
class AnaphoraResolution:
    """Outcomes of the compound-reference and procedure-reference attempts for one mention."""
    compound_reference: ResolutionOutcome = ResolutionOutcome.NO_REFERENCE
    procedure_reference: ResolutionOutcome = ResolutionOutcome.NO_REFERENCE

    @property
    def resolved(self) -> bool:
        return ResolutionOutcome.RESOLVED in (self.compound_reference, self.procedure_reference)


@dataclass
class Paragraph:
    """One paragraph of experimental text as a tagged element tree."""
    tagged_document: etree._Element


@dataclass
class ExperimentalStep:
    """
    A step of an experimental section.

    Attributes:
        paragraphs: Tagged paragraphs of the step, in document order
        procedure_element: Procedure span labelling the step (e.g. "Step 2"), if any
        target_chemical_alias_pair: Compound the step makes, with its label, if stated
    """
    paragraphs: List[Paragraph] = field(default_factory=list)
    procedure_element: Optional[etree._Element] = None
    target_chemical_alias_pair: Optional[ChemicalAliasPair] = None


@dataclass
class ExperimentalSection:
    """
    An experimental section (e.g. "Example 3") made up of ordered steps.

    Attributes:
        procedure_element: Procedure span labelling the section; always present
        steps: Steps in document order
        target_chemical_alias_pair: Compound the section makes, with its label, if stated
    """
    procedure_element: Optional[etree._Element]
    steps: List[ExperimentalStep] = field(default_factory=list)
    target_chemical_alias_pair: Optional[ChemicalAliasPair] = None


# (step, mention -> chemical, step target, title compound) -> reactions
ReactionExtractor = Callable[
    [ExperimentalStep, Dict[etree._Element, Chemical], Optional[Chemical], Optional[Chemical]],
    List[Reaction],
]
