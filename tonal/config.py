from .conftools import CheckedDict


_defaultconfig = {
    'cents.tolerance': 5.0,
    'cents.precision': 2,
    'approx.convergentLimit': 10,
    'approx.maxIterations': 100000,
    'tree.pathLimit': 4096,
    'repr.maxRatioDigits': 6,
}

_validator = {
    'cents.tolerance::type': float,
    'cents.tolerance::range': (0, 1200),
    'cents.precision::range': (0, 12),
    'approx.convergentLimit::range': (1, 1000),
    'approx.maxIterations::range': (1, 10**9),
    'tree.pathLimit::range': (1, 10**7),
    'repr.maxRatioDigits::range': (1, 100),
}

_help = {
    'cents.tolerance':
        "Default tolerance (in cents) used when searching for approximations",
    'cents.precision':
        "Number of decimals used when showing cents. Comparisons always use full precision",
    'approx.convergentLimit':
        "Default number of partial quotients used by the continued fraction and "
        "quotient walk approximations",
    'approx.maxIterations':
        "Max. number of candidates tested by the superparticular approximation "
        "before giving up",
    'tree.pathLimit':
        "Max. number of nodes yielded by FractionTree.path_to",
    'repr.maxRatioDigits':
        "A Ratio whose antecedent has more digits than this is labeled by its float value",
}


config = CheckedDict(default=_defaultconfig, validator=_validator, help=_help,
                     name='tonal')
