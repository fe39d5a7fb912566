"""
A validated configuration dictionary
"""
from __future__ import annotations
import logging
import textwrap
import typing as t

import tabulate


logger = logging.getLogger("tonal.conftools")


def _checkValidator(validatordict:dict, defaultdict:dict) -> dict:
    """
    Checks the validity of the validator itself, and makes any needed
    postprocessing on the validator

    :param validatordict: the validator dict
    :param defaultdict: the dict containing defaults
    :return: a postprocessed validator dict
    """
    stripped_keys = {key.split("::")[0] for key in validatordict.keys()}
    not_present = stripped_keys - defaultdict.keys()
    if any(not_present):
        notpres = ", ".join(sorted(not_present))
        raise KeyError(f"The validator dict has keys not present in the defaultdict ({notpres})")
    v = {}
    for key, value in validatordict.items():
        if key.endswith('::choices') and isinstance(value, (list, tuple)):
            value = set(value)
        v[key] = value
    return v


def _isfloaty(value):
    return (isinstance(value, (int, float)) or hasattr(value, '__float__')) and not isinstance(value, bool)


class CheckedDict(dict):

    def __init__(self, default: dict, validator: dict=None, help: dict=None,
                 name='') -> None:
        """
        A dictionary which checks that the keys and values are valid
        according to a default dict and a validator.

        default: a dict will all default values. A config can accept only
            keys which are already present in the default

        validator: a dict containing choices, types and ranges for the keys
            in the default. Given a default like: {'keyA': 'foo', 'keyB': 20},
            a validator could be:

            {'keyA::choices': ['foo', 'bar'],
             'keyB::type': float,
             'keyB::range': (0, 100)
            }

        help: a dict containing help lines for keys defined in default

        """
        super().__init__()
        self.name = name
        self.default = default
        self._allowedkeys = set(default.keys())
        self._validator = _checkValidator(validator, default) if validator else None
        self._help = help or {}
        self._helpwidth = 58
        errormsg = self.checkDict(default)
        if errormsg:
            raise ValueError(f"The default dict is invalid: {errormsg}")
        super().update(default)

    def diff(self) -> dict:
        """
        Get a dict containing keys:values which differ from default
        """
        out = {}
        default = self.default
        for key, value in self.items():
            valuedefault = default[key]
            if value != valuedefault:
                out[key] = value
        return out

    def __setitem__(self, key:str, value) -> None:
        if key not in self._allowedkeys:
            raise KeyError(f"Unknown key: {key}")
        oldvalue = self.get(key)
        if oldvalue is not None and oldvalue == value and type(oldvalue) is type(value):
            return
        errormsg = self.checkValue(key, value)
        if errormsg:
            raise ValueError(errormsg)
        logger.debug(f"{self.name or 'config'}: {key} = {value!r}")
        super().__setitem__(key, value)

    def checkDict(self, d:dict) -> str:
        invalidkeys = [key for key in d if key not in self.default]
        if invalidkeys:
            return f"Some keys are not valid: {invalidkeys}"
        for k, v in d.items():
            errormsg = self.checkValue(k, v)
            if errormsg:
                return errormsg
        return ""

    def getChoices(self, key:str) -> t.Optional[set]:
        """
        Return a seq. of possible values for key `k`
        or None
        """
        if key not in self._allowedkeys:
            raise KeyError(f"{key} is not a valid key")
        if not self._validator:
            return None
        return self._validator.get(key+"::choices", None)

    def getHelp(self, key:str) -> t.Optional[str]:
        return self._help.get(key)

    def checkValue(self, key: str, value) -> t.Optional[str]:
        """
        Check if value is valid for key

        Returns errormsg. If value is of correct type, errormsg is None

        Example::

            error = config.checkValue(key, value)
            if error:
                print(error)
        """
        choices = self.getChoices(key)
        if choices is not None and value not in choices:
            return f"key should be one of {choices}, got {value}"
        t = self.getType(key)
        if t == float:
            if not _isfloaty(value):
                return f"Expected floatlike for key {key}, got {type(value).__name__}"
        elif t == int:
            if isinstance(value, bool) or not isinstance(value, int):
                return f"Expected int for key {key}, got {type(value).__name__}"
        elif t == str and not isinstance(value, (bytes, str)):
            return f"Expected str or bytes for key {key}, got {type(value).__name__}"
        elif not isinstance(value, t):
            return f"Expected {t.__name__} for key {key}, got {type(value).__name__}"
        r = self.getRange(key)
        if r and not (r[0] <= value <= r[1]):
            return f"Value should be within range {r}, got {value}"
        return None

    def getRange(self, key:str) -> t.Optional[tuple]:
        if key not in self._allowedkeys:
            raise KeyError(f"{key} is not a valid key")
        if not self._validator:
            return None
        return self._validator.get(key+"::range", None)

    def getType(self, key:str) -> t.Union[type, tuple]:
        """
        Returns the expected type for key, as a type

        NB: all strings are of type str, otherwise the type of the
            default value, unless a type has been defined
            explicitely in the validator

        See Also: checkValue
        """
        if self._validator is not None:
            definedtype = self._validator.get(key + "::type")
            if definedtype:
                return definedtype
            choices = self.getChoices(key)
            if choices:
                return tuple(set(type(choice) for choice in choices))
        defaultvalue = self.default.get(key)
        if defaultvalue is None:
            raise KeyError("Key is not present in default config")
        if isinstance(defaultvalue, (bytes, str)):
            return str
        else:
            return type(defaultvalue)

    def getTypestr(self, key:str) -> str:
        t = self.getType(key)
        if isinstance(t, tuple):
            return "(" + ", ".join(x.__name__ for x in t) + ")"
        else:
            return t.__name__

    def reset(self) -> None:
        """
        Resets the config to its default (inplace)
        """
        self.clear()
        super().update(self.default)

    def update(self, d:dict) -> None:
        errormsg = self.checkDict(d)
        if errormsg:
            raise ValueError(f"dict is invalid: {errormsg}")
        for key, value in d.items():
            self[key] = value

    def __repr__(self) -> str:
        header = f"Config: {self.name}\n" if self.name else ""
        rows = []
        for k in sorted(self.keys()):
            info = []
            lines = []
            choices = self.getChoices(k)
            if choices:
                info.append(", ".join(str(ch) for ch in choices))
            keyrange = self.getRange(k)
            if keyrange:
                info.append(f"between {keyrange}")
            info.append(self.getTypestr(k))
            rows.append((k, str(self[k]), " ".join(info)))
            doc = self.getHelp(k)
            if doc:
                lines.extend(textwrap.wrap(doc, self._helpwidth))
            for line in lines:
                rows.append(("", "", line))
        return header + tabulate.tabulate(rows)
