#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## system variables and constraints
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.power_balance')

from .mc_utils import add_model_attr, linear_summation
from .blocks import BlockType
component_name = 'power_balance'

## increment bids supply energy, the others consume it
BID_INJECTION = ( (BlockType.INCREMENT, 1.),
                  (BlockType.DECREMENT, -1.),
                  (BlockType.PRICE_SENSITIVE_DEMAND, -1.),
                )

@add_model_attr(component_name, requires = {'data_loader': None, 'power_vars': None})
def energy_balance(fnm, slack_penalty=None):
    '''
    Copper-plate energy balance in each time period:

        sum_g PowerGenerated[g,t] + sum_b Increment[b,t] - sum_b Decrement[b,t]
            - sum_b PriceSensitiveDemand[b,t] (+ LoadShedding[t] - OverGeneration[t]) == TotalDemand[t]

    Bid terms appear only if the bid variables are in the model; the
    mismatch variables only with a slack_penalty.
    '''
    model = fnm.model
    power_generated = fnm.variable('PowerGenerated')

    bid_terms = list()
    for block_type, injection in BID_INJECTION:
        var = fnm.find_variable(block_type.aggregate)
        if var is not None:
            bid_terms.append((var, model.component(block_type.entities), injection))

    if slack_penalty is not None:
        model.LoadShedding = Var(model.TimePeriods, within=NonNegativeReals)
        model.OverGeneration = Var(model.TimePeriods, within=NonNegativeReals)
        fnm.objective.add(linear_summation([model.LoadShedding[t] for t in model.TimePeriods]+
                                           [model.OverGeneration[t] for t in model.TimePeriods],
                                           [slack_penalty]*(2*len(model.TimePeriods))))

    def energy_balance_rule(m, t):
        linear_vars = [ power_generated[g,t] for g in m.ThermalGenerators ]
        linear_coefs = [1.]*len(linear_vars)
        for var, bids, injection in bid_terms:
            for b in bids:
                linear_vars.append(var[b,t])
                linear_coefs.append(injection)
        if slack_penalty is not None:
            linear_vars.extend((m.LoadShedding[t], m.OverGeneration[t]))
            linear_coefs.extend((1., -1.))
        return (linear_summation(linear_vars, linear_coefs), m.TotalDemand[t])

    model.EnergyBalance = Constraint(model.TimePeriods, rule=energy_balance_rule)

    logger.debug("Added energy balance with {} bid types{}".format(len(bid_terms),
                 "" if slack_penalty is None else ", slack penalty {}".format(slack_penalty)))
