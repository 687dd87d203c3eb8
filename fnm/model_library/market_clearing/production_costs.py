#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for production costs
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.production_costs')

from .mc_utils import add_model_attr
from .blocks import BlockType, block_vars
from .curves import curve_properties
from .objective import variable_cost, linear_cost
from .status_vars import commitment_status
component_name = 'production_costs'

def block_cost(fnm, block_type):
    '''
    Formulates the curves of block_type with blocks and adds their cost
    to the objective of fnm.

    Returns
    -------
        the cost expression added to the objective
    '''
    model = fnm.model
    names = model.component(block_type.entities)
    curves = getattr(model, block_type.curves)

    prices, limits, n_blocks = curve_properties(curves, block_type.mode)
    block_vars(fnm, names, model.TimePeriods, limits, n_blocks, block_type)
    cost = variable_cost(fnm, names, model.TimePeriods, n_blocks, prices, block_type)
    fnm.objective.add(cost)

    logger.debug("Added {} block costs".format(block_type.name))
    return cost

@add_model_attr(component_name, requires = {'data_loader': None, 'power_vars': None})
def thermal_variable_cost(fnm):
    '''
    Offer curve cost of the thermal generators
    '''
    return block_cost(fnm, BlockType.GENERATION)

@add_model_attr('noload_costs', requires = {'data_loader': None})
def thermal_noload_cost(fnm):
    '''
    NoLoadCost for each time period a generator is on. Without commitment
    variables, this is a constant given by the fixed CommitmentStatus.
    '''
    model = fnm.model
    status = commitment_status(fnm)
    if isinstance(status, Var):
        cost = linear_cost(fnm, status.name, model.NoLoadCost, model.ThermalGenerators)
    else:
        cost = sum(value(model.NoLoadCost[g,t]*status[g,t]) for g in model.ThermalGenerators for t in model.TimePeriods)
    fnm.objective.add(cost)
    return cost
