#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Piecewise block formulation shared by offer and bid curves.

Every curve (name, t) with n[name,t] blocks gets one auxiliary variable per
block, bounded by the block MW limit, and the aggregate variable (e.g.,
PowerGenerated) is defined as the sum of its blocks:

    aggregate[g,t] == sum_q aux[g,t,q]
    0 <= aux[g,t,q] <= L[g,t,q] * u[g,t]     if the commitment variable u exists
    0 <= aux[g,t,q] <= L[g,t,q]              otherwise

Blocks are not ordered explicitly. With non-decreasing block prices and a
minimized objective, an optimal solution fills the cheaper (lower index)
blocks first. Prices are not checked; a curve with decreasing prices gives a
feasible model whose block dispatch has no economic meaning.
"""
from enum import Enum
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.blocks')

from fnm.common.errors import MissingVariableError
from fnm.model_library.decl import declare_set
from .curves import CurveMode
from .mc_utils import linear_summation

class BlockType(Enum):
    '''
    The kinds of curves which are formulated with blocks. Each member carries:

    aggregate: name of the variable defined as the sum of the blocks
    entities: name of the Set of entities with this kind of curve
    curves: name of the (name, t) -> curve dictionary on the model
    sense: 1 for costs, -1 for revenue-like curves
    mode: CurveMode of the curve data
    commitment: name of the status variable which scales the block limits, if any
    '''
    GENERATION = ('PowerGenerated', 'ThermalGenerators', 'OfferCurves', 1, CurveMode.CUMULATIVE, 'UnitOn')
    INCREMENT = ('Increment', 'IncrementBids', 'IncrementCurves', 1, CurveMode.BLOCK, None)
    DECREMENT = ('Decrement', 'DecrementBids', 'DecrementCurves', -1, CurveMode.BLOCK, None)
    PRICE_SENSITIVE_DEMAND = ('PriceSensitiveDemand', 'PriceSensitiveDemandBids', 'PriceSensitiveDemandCurves', -1, CurveMode.BLOCK, None)

    def __init__(self, aggregate, entities, curves, sense, mode, commitment):
        self.aggregate = aggregate
        self.entities = entities
        self.curves = curves
        self.sense = sense
        self.mode = mode
        self.commitment = commitment

    @property
    def aux(self):
        return self.aggregate+'Block'

    @property
    def block_sum(self):
        return self.aggregate+'BlockSum'

    @property
    def block_limits(self):
        return self.aggregate+'BlockLimits'

    @property
    def index_set(self):
        return self.aggregate+'BlockIndexSet'

def block_vars(fnm, names, time_periods, block_limits, n_blocks, block_type):
    '''
    Adds the block variables of block_type, the constraints linking them to
    the aggregate variable, and the block limits.

    Parameters
    ----------
    fnm : fnm.models.full_network_model.FullNetworkModel
    names : iterable
        Entities with curves of this type, e.g. the thermal generators
    time_periods : iterable
    block_limits : dict
        (name, t) -> list of block MW limits, as returned by curve_properties
    n_blocks : dict
        (name, t) -> number of blocks
    block_type : BlockType

    Returns
    -------
        the pyomo Var of block variables, indexed by (name, t, q) for q in 1..n_blocks[name,t]

    Raises
    ------
    MissingVariableError
        If the aggregate variable of block_type is not in the model
    '''
    model = fnm.model
    aggregate = fnm.find_variable(block_type.aggregate)
    if aggregate is None:
        raise MissingVariableError(block_type.aggregate, needed_by=block_type.block_sum)

    names = list(names)
    time_periods = list(time_periods)

    index_set = declare_set(block_type.index_set, model,
                            [(n,t,q) for n in names for t in time_periods for q in range(1, n_blocks[n,t]+1)],
                            dimen=3)
    aux = Var(index_set, within=NonNegativeReals)
    model.add_component(block_type.aux, aux)

    def block_sum_rule(m, n, t):
        linear_vars = [ aux[n,t,q] for q in range(1, n_blocks[n,t]+1) ]
        linear_coefs = [1.]*len(linear_vars)
        linear_vars.append(aggregate[n,t])
        linear_coefs.append(-1.)
        return (linear_summation(linear_vars, linear_coefs), 0.)
    model.add_component(block_type.block_sum,
                        Constraint(names, time_periods, rule=block_sum_rule))

    commitment = None
    if block_type.commitment is not None:
        commitment = fnm.find_variable(block_type.commitment)

    if commitment is not None:
        def block_limits_rule(m, n, t, q):
            return (None, linear_summation([aux[n,t,q], commitment[n,t]], [1., -block_limits[n,t][q-1]]), 0.)
    else:
        def block_limits_rule(m, n, t, q):
            return (None, aux[n,t,q], block_limits[n,t][q-1])
    model.add_component(block_type.block_limits,
                        Constraint(index_set, rule=block_limits_rule))

    logger.debug("Added {} {} variables for {} entities{}".format(len(index_set), block_type.aux, len(names),
                 "" if commitment is None else ", limits scaled by "+block_type.commitment))
    return aux
