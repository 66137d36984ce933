"""
Cross-section state of one document's extraction run.

Holds the alias map and the reactions already filed per section and step.
A fresh instance is created for every document and passed explicitly to the
parsers; instances must never be shared between documents.
"""

from typing import Dict, List, Mapping, Optional, Tuple

from loguru import logger

from reactionxref.chemistry.models import Chemical, Reaction


class PreviousReactionData:
    """
    Aliases and previously extracted reactions of the current document.

    Alias keys and section/step keys are compared by exact string equality.
    Aliases are last-writer-wins; reactions are only ever appended.
    """

    def __init__(self):
        self._alias_to_chemical: Dict[str, Chemical] = {}
        self._section_to_reactions: Dict[str, List[Reaction]] = {}
        self._section_and_step_to_reactions: Dict[Tuple[str, Optional[str]], List[Reaction]] = {}

    # ── Aliases ──────────────────────────────────────────────────────

    def register_alias(self, alias: str, chemical: Chemical) -> None:
        previous = self._alias_to_chemical.get(alias)
        if previous is not None and previous is not chemical:
            logger.trace(f"Alias '{alias}' redefined: {previous.name} -> {chemical.name}")
        self._alias_to_chemical[alias] = chemical

    def register_aliases(self, aliases: Mapping[str, Chemical]) -> None:
        for alias, chemical in aliases.items():
            self.register_alias(alias, chemical)

    def get_chemical_by_alias(self, alias: str) -> Optional[Chemical]:
        return self._alias_to_chemical.get(alias)

    @property
    def aliases(self) -> Dict[str, Chemical]:
        """Copy of the alias map."""
        return dict(self._alias_to_chemical)

    # ── Reactions ────────────────────────────────────────────────────

    def add_reactions(self, reactions: List[Reaction], section_identifier: str,
                      step_identifier: Optional[str] = None) -> None:
        """
        File the reactions of one step.

        Args:
            reactions: Reactions extracted from the step
            section_identifier: Label of the enclosing section
            step_identifier: Label of the step, or None for the section's own step
        """
        self._section_to_reactions.setdefault(section_identifier, []).extend(reactions)
        self._section_and_step_to_reactions.setdefault(
            (section_identifier, step_identifier), []
        ).extend(reactions)
        logger.debug(
            f"Filed {len(reactions)} reaction(s) under section '{section_identifier}'"
            f" step '{step_identifier}'"
        )

    def get_reactions(self, section_identifier: str) -> List[Reaction]:
        """All reactions filed under a section, in filing order."""
        return list(self._section_to_reactions.get(section_identifier, []))

    def get_step_reactions(self, section_identifier: str, step_identifier: Optional[str]) -> List[Reaction]:
        return list(self._section_and_step_to_reactions.get((section_identifier, step_identifier), []))

    def get_product_of_reaction(self, section_identifier: Optional[str],
                                step_identifier: Optional[str] = None) -> Optional[Chemical]:
        """
        The product made by a section or by one of its steps.

        With no step identifier the section's reactions as a whole are used,
        so the product of its last filed reaction is returned. The first
        product of the last reaction that has products is taken.

        Returns:
            The product chemical, or None if nothing is filed under the identifiers
        """
        if section_identifier is None:
            return None
        if step_identifier is None:
            reactions = self._section_to_reactions.get(section_identifier, [])
        else:
            reactions = self._section_and_step_to_reactions.get((section_identifier, step_identifier), [])

        for reaction in reversed(reactions):
            if reaction.products:
                return reaction.products[0]
        return None

    def has_section(self, section_identifier: str) -> bool:
        return section_identifier in self._section_to_reactions
