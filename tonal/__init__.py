"""
**tonal** is a set of modules to work with musical ratios:

Features
--------

- ratio: exact ratios (Ratio, ReducedRatio) with lattice operations,
  prime factorization and harmonic complexity (benedetti, tenney, weil, wilson)
- cents: conversions between ratios, log2 and cents
- step: ratios mapped to equal divisions of the octave
- interval: the interval between two ratios
- extendedratio: chords as harmonic (4:5:6) or subharmonic extended ratios
- continuedfraction: exact continued fraction expansion
- fractiontree: walks on the Stern-Brocot tree
- approximation: rational approximations of a ratio within a cents tolerance,
  by continued fraction, quotient walk, tree path, superparticulars and
  lattice neighborhood
- numtheory: primality and factorization
- config: the default values used by all of the above
"""
from .config import config
from .ratio import Ratio, ReducedRatio, asratio
from .cents import Cents
from .step import Step
from .interval import Interval
from .extendedratio import ExtendedRatio, SubharmonicExtendedRatio
from .continuedfraction import ContinuedFraction
from .fractiontree import FractionTree
from .approximation import (Approximation, ApproximationSet, neighbors,
                            NotFoundError, SearchTimeout)
