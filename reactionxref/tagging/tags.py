"""
Tag vocabulary of the tagged-sentence trees consumed by the extraction core.

Element names are matched by exact identity. Container tags wrap a phrase or
entity; token tags are terminal elements holding a single word.
"""

# Containers
MOLECULE = "MOLECULE"
UNNAMED_MOLECULE = "UNNAMEDMOLECULE"
OSCARCM = "OSCARCM"
MIXTURE = "MIXTURE"
QUANTITY = "QUANTITY"
REFERENCE_TO_COMPOUND = "REFERENCETOCOMPOUND"
PROCEDURE = "PROCEDURE"
ATMOSPHERE_PHRASE = "AtmospherePhrase"
NOUN_PHRASE = "NounPhrase"
SENTENCE = "Sentence"
DOCUMENT = "Document"

# Tokens
OSCAR_CM = "OSCAR-CM"
DT = "DT"
DT_THE = "DT-THE"
CD = "CD"
CD_ALPHANUM = "CD-ALPHANUM"
NN_IDENTIFIER = "NN-IDENTIFIER"
NN_EXAMPLE = "NN-EXAMPLE"
NN_METHOD = "NN-METHOD"
NN_CHEMENTITY = "NN-CHEMENTITY"
LRB = "LRB"
RRB = "RRB"
COMMA = "COMMA"
COLON = "COLON"

# Tokens that can carry a section/step/compound label
IDENTIFIER_TAGS = (CD, CD_ALPHANUM, NN_IDENTIFIER)

# Qualifier words that mark the following identifier as a section
SECTION_QUALIFIER_TAGS = (NN_EXAMPLE, NN_METHOD)

# Spans that are detected as chemical mentions
MENTION_TAGS = (MOLECULE, UNNAMED_MOLECULE)
