"""
Tests for entity-type classification of chemical mentions.

Each rule of the chain is exercised with literal tagged sentences.
"""

import pytest

from reactionxref.chemistry.models import ChemicalIdentifierPair, EntityType, EntityTypeAlreadyAssigned
from reactionxref.tagging import tags
from reactionxref.tagging.tree import to_xml
from tests.fixtures.tagged_documents import (
    BENZENE,
    NITROBENZENE,
    chemical,
    first_mention,
    molecule,
    quantity,
    reference,
    token,
)


def classify(classifier, name, *parts, pair=None):
    mention = first_mention(*parts)
    return classifier.determine_entity_type(mention, chemical(name, pair))


# ============================================================================
# FALSE POSITIVES
# ============================================================================

class TestFalsePositiveRule:
    """Test the false-positive filters."""

    @pytest.mark.parametrize("words", [
        ("1H",),
        ("400", "MHz", "1H"),
        ("13C", "NMR"),
    ])
    def test_nmr_names(self, classifier, words):
        name = " ".join(words)
        assert classify(classifier, name, molecule(*words)) == EntityType.FALSE_POSITIVE

    def test_ring_hydrogen_prefix_is_not_nmr(self, classifier):
        result = classify(classifier, "2H-pyran", molecule("2H-pyran"), pair=BENZENE)
        assert result == EntityType.EXACT

    def test_atmosphere_phrase(self, classifier):
        atmosphere = (f"<{tags.ATMOSPHERE_PHRASE}>" + token("IN-UNDER", "under")
                      + molecule("nitrogen") + f"</{tags.ATMOSPHERE_PHRASE}>")
        result = classify(classifier, "nitrogen", atmosphere,
                          pair=ChemicalIdentifierPair("N#N", "InChI=1S/N2/c1-2"))
        assert result == EntityType.FALSE_POSITIVE

    def test_equals_sign(self, classifier):
        assert classify(classifier, "C=O", molecule("C=O")) == EntityType.FALSE_POSITIVE

    def test_silica(self, classifier):
        assert classify(classifier, "silica gel", molecule("silica", "gel")) == EntityType.FALSE_POSITIVE
        assert classify(classifier, "Silica", molecule("Silica")) == EntityType.FALSE_POSITIVE

    def test_reference_does_not_override_false_positive(self, classifier):
        result = classify(classifier, "1H", molecule("1H", extra=reference("3")))
        assert result == EntityType.FALSE_POSITIVE


# ============================================================================
# CHEMICAL CLASSES FROM THE NAME
# ============================================================================

class TestNameRules:
    """Test plural-ending and functional-class rules."""

    @pytest.mark.parametrize("name", ["xylenes", "phosphates", "Amides", "ketones"])
    def test_plural_ending(self, classifier, name):
        assert classify(classifier, name, molecule(name)) == EntityType.CHEMICAL_CLASS

    def test_non_plural_s_ending(self, classifier):
        # "is" is not a plural ending
        assert classify(classifier, "tris", molecule("tris"), pair=BENZENE) == EntityType.EXACT

    def test_functional_class(self, classifier):
        assert classify(classifier, "ketone", molecule("ketone")) == EntityType.CHEMICAL_CLASS

    def test_functional_group_is_not_a_class(self, classifier):
        # "nitro" is a functional group only; with nothing around it the fallback applies
        assert classify(classifier, "nitro", molecule("nitro")) == EntityType.FALSE_POSITIVE

    def test_plural_takes_precedence_over_head_noun(self, classifier):
        result = classify(classifier, "xylenes", molecule("xylenes"), token("NN", "group"))
        assert result == EntityType.CHEMICAL_CLASS


# ============================================================================
# HEAD NOUN
# ============================================================================

class TestHeadNounRule:
    """Test classification by the word following the mention."""

    def test_compounds_makes_class(self, classifier):
        result = classify(classifier, "nitro", molecule("nitro"), token("NNS", "compounds"))
        assert result == EntityType.CHEMICAL_CLASS

    def test_derivative_case_insensitive(self, classifier):
        result = classify(classifier, "benzene", molecule("benzene"), token("NN", "Derivative"),
                          pair=BENZENE)
        assert result == EntityType.CHEMICAL_CLASS

    @pytest.mark.parametrize("head_noun", ["group", "ring", "rings", "atom", "chain", "complex"])
    def test_fragment_qualifiers(self, classifier, head_noun):
        result = classify(classifier, "benzene", molecule("benzene"), token("NN", head_noun),
                          pair=BENZENE)
        assert result == EntityType.FRAGMENT

    def test_surface_is_false_positive(self, classifier):
        result = classify(classifier, "gold", molecule("gold"), token("NN", "surface"))
        assert result == EntityType.FALSE_POSITIVE

    def test_head_noun_in_next_sentence_part(self, classifier):
        # the following token is found across phrase boundaries
        parts = (f"<{tags.NOUN_PHRASE}>" + molecule("benzene") + f"</{tags.NOUN_PHRASE}>"
                 + f"<{tags.NOUN_PHRASE}>" + token("NN", "ring") + f"</{tags.NOUN_PHRASE}>")
        assert classify(classifier, "benzene", parts, pair=BENZENE) == EntityType.FRAGMENT

    def test_unrelated_head_noun(self, classifier):
        result = classify(classifier, "benzene", molecule("benzene"), token("VBD", "was"),
                          pair=BENZENE)
        assert result == EntityType.EXACT


# ============================================================================
# PRECEDING QUALIFIER
# ============================================================================

class TestPrecedingQualifierRule:
    """Test classification by the word before the first chemical name."""

    def test_indefinite_determiner(self, classifier):
        result = classify(classifier, "benzene", token(tags.DT, "a"), molecule("benzene"),
                          pair=BENZENE)
        assert result == EntityType.CHEMICAL_CLASS

    def test_definite_determiner(self, classifier):
        result = classify(classifier, "benzene", token(tags.DT_THE, "the"), molecule("benzene"),
                          pair=BENZENE)
        assert result == EntityType.DEFINITE_REFERENCE

    def test_determiner_inside_mention(self, classifier):
        result = classify(classifier, "benzene",
                          molecule("benzene", prefix=token(tags.DT_THE, "the")), pair=BENZENE)
        assert result == EntityType.DEFINITE_REFERENCE

    @pytest.mark.parametrize("word", ["on", "onto", "On"])
    def test_surface_pre_qualifier(self, classifier, word):
        result = classify(classifier, "gold", token("IN-ON", word), molecule("gold"))
        assert result == EntityType.FALSE_POSITIVE

    def test_head_noun_takes_precedence(self, classifier):
        result = classify(classifier, "benzene", token(tags.DT_THE, "the"), molecule("benzene"),
                          token("NN", "ring"), pair=BENZENE)
        assert result == EntityType.FRAGMENT


# ============================================================================
# REFERENCE OVERRIDE AND FALLBACK
# ============================================================================

class TestReferenceOverride:
    """Test that a reference-to-compound makes a mention a definite reference."""

    def test_overrides_chemical_class(self, classifier):
        result = classify(classifier, "benzene", token(tags.DT, "a"),
                          molecule("benzene", extra=reference("3")), pair=BENZENE)
        assert result == EntityType.DEFINITE_REFERENCE

    def test_overrides_fallback(self, classifier):
        result = classify(classifier, "compound", molecule("compound", extra=reference("3a")))
        assert result == EntityType.DEFINITE_REFERENCE


class TestFallback:
    """Test the exact / false-positive fallback."""

    def test_resolved_structure_is_exact(self, classifier):
        assert classify(classifier, "benzene", molecule("benzene"), pair=BENZENE) == EntityType.EXACT

    def test_unanchored_is_false_positive(self, classifier):
        assert classify(classifier, "foobarane", molecule("foobarane")) == EntityType.FALSE_POSITIVE

    def test_quantity_anchors_mention(self, classifier):
        result = classify(classifier, "foobarane", molecule("foobarane", extra=quantity("2.0", "g")))
        assert result == EntityType.EXACT

    def test_interpretable_name_part_anchors_mention(self, classifier):
        result = classify(classifier, "crude benzene", molecule("crude", "benzene"))
        assert result == EntityType.EXACT

    def test_inchi_only_is_exact(self, classifier):
        pair = ChemicalIdentifierPair(None, NITROBENZENE.inchi)
        assert classify(classifier, "foobarane", molecule("foobarane"), pair=pair) == EntityType.EXACT


# ============================================================================
# ASSIGNMENT
# ============================================================================

class TestAssignEntityType:
    """Test recording the type on the chemical."""

    def test_assigns_type(self, classifier):
        mention = first_mention(molecule("benzene"))
        c = chemical("benzene", BENZENE)
        assert classifier.assign_entity_type(mention, c) == EntityType.EXACT
        assert c.entity_type == EntityType.EXACT

    def test_type_is_set_once(self, classifier):
        mention = first_mention(molecule("benzene"))
        c = chemical("benzene", BENZENE)
        classifier.assign_entity_type(mention, c)
        with pytest.raises(EntityTypeAlreadyAssigned):
            classifier.assign_entity_type(mention, c)

    def test_tree_is_not_modified(self, classifier):
        mention = first_mention(token(tags.DT, "a"), molecule("benzene", extra=reference("3")))
        before = to_xml(mention.getroottree().getroot())
        classifier.assign_entity_type(mention, chemical("benzene", BENZENE))
        assert to_xml(mention.getroottree().getroot()) == before
