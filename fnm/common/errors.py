#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Exceptions raised while building a market clearing formulation.

All of these are raised at build time and abort the formulation; nothing in
fnm catches them. The caller fixes the offending data (or the order in which
formulation steps are called) and rebuilds the model from scratch.
"""


class FNMError(Exception):
    pass


class ConfigurationError(FNMError):
    '''
    Raised for malformed input data, e.g., an offer curve whose cumulative
    quantities decrease, or for an unrecognized option such as an unknown
    soft constraint name.
    '''
    pass


class MissingVariableError(FNMError):
    '''
    Raised when a formulation step needs a variable that has not been
    added to the model yet.
    '''
    def __init__(self, varname, needed_by=None):
        self.varname = varname
        self.needed_by = needed_by
        if needed_by is None:
            msg = "Variable {} is not in the model".format(varname)
        else:
            msg = "{} requires the variable {}, which is not in the model; "\
                  "add it first".format(needed_by, varname)
        super().__init__(msg)
