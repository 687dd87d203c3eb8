#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for start-up costs
from pyomo.environ import *

from .mc_utils import add_model_attr
from .objective import linear_cost
component_name = 'startup_costs'

@add_model_attr(component_name, requires = {'data_loader': None, 'status_vars': ['commitment_vars']})
def thermal_startup_cost(fnm):
    '''
    StartupCost for each start of a generator
    '''
    model = fnm.model
    cost = linear_cost(fnm, 'UnitStart', model.StartupCost, model.ThermalGenerators)
    fnm.objective.add(cost)
    return cost
