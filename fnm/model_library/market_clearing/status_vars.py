#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## commitment variables of the thermal generators
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.status_vars')

from .mc_utils import add_model_attr
component_name = 'status_vars'

def _is_relaxed(model):
    return bool(getattr(model, 'relax_binaries', False))

def commitment_status(fnm):
    '''
    Returns UnitOn if the model has commitment variables, otherwise
    the fixed CommitmentStatus param; both are indexed by (g,t)
    '''
    unit_on = fnm.find_variable('UnitOn')
    if unit_on is None:
        return fnm.model.CommitmentStatus
    return unit_on

@add_model_attr(component_name, requires = {'data_loader': None} )
def commitment_vars(fnm):
    '''
    Adds the on, start and stop variables of every generator in every
    period, as in the three-binary formulation of

    L. L. Garver. Power generation scheduling by integer programming-development
    of theory. AIEE Transactions, Part III, 81(3), 1962.

    The variables are continuous in [0,1] if the model relaxes binaries.
    '''
    model = fnm.model
    if _is_relaxed(model):
        domain = UnitInterval
    else:
        domain = Binary

    model.UnitOn = Var(model.ThermalGenerators, model.TimePeriods, within=domain)
    model.UnitStart = Var(model.ThermalGenerators, model.TimePeriods, within=domain)
    model.UnitStop = Var(model.ThermalGenerators, model.TimePeriods, within=domain)

    logger.debug("Added commitment variables within {}".format(domain.name))
