#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## the objective and the cost expressions which are added to it
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.objective')

from fnm.common.errors import MissingVariableError
from .mc_utils import linear_summation

class ObjectiveAccumulator(object):
    '''
    Owns the single (linear) objective of a model. Cost terms from the
    different formulation steps are summed into it, in any order; the sense
    is always minimize.
    '''

    def __init__(self, model, name='TotalCostObjective'):
        self._model = model
        self.name = name

    @property
    def objective(self):
        ''' The pyomo Objective, or None if nothing was added yet '''
        return self._model.component(self.name)

    def add(self, expr):
        obj = self.objective
        if obj is None:
            obj = Objective(expr=expr, sense=minimize)
            self._model.add_component(self.name, obj)
            logger.debug("Created objective {}".format(self.name))
        else:
            obj.expr = obj.expr + expr
            obj.sense = minimize
        return obj

def variable_cost(fnm, names, time_periods, n_blocks, prices, block_type):
    '''
    Returns sense * sum_{n,t,q} prices[n,t][q] * aux[n,t,q], where aux are
    the block variables of block_type; q only runs over the blocks of (n,t).
    '''
    aux = fnm.find_variable(block_type.aux)
    if aux is None:
        raise MissingVariableError(block_type.aux, needed_by='variable_cost')
    linear_vars = list()
    linear_coefs = list()
    for n in names:
        for t in time_periods:
            for q in range(1, n_blocks[n,t]+1):
                linear_vars.append(aux[n,t,q])
                linear_coefs.append(block_type.sense*prices[n,t][q-1])
    return linear_summation(linear_vars, linear_coefs)

def linear_cost(fnm, var_name, cost, names):
    '''
    Returns sum_{n,t} cost[n,t] * var[n,t] for the variable named var_name
    over names and the model time periods.
    '''
    var = fnm.find_variable(var_name)
    if var is None:
        raise MissingVariableError(var_name, needed_by='linear_cost')
    time_periods = fnm.model.TimePeriods
    linear_vars = [ var[n,t] for n in names for t in time_periods ]
    linear_coefs = [ value(cost[n,t]) for n in names for t in time_periods ]
    return linear_summation(linear_vars, linear_coefs)
