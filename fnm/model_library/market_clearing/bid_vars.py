#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for virtual and demand bid variables
from pyomo.environ import *

from .mc_utils import add_model_attr
from .blocks import BlockType
from .curves import curve_properties
component_name = 'bid_vars'

BID_BLOCK_TYPES = (BlockType.INCREMENT, BlockType.DECREMENT, BlockType.PRICE_SENSITIVE_DEMAND)

@add_model_attr(component_name, requires = {'data_loader': None} )
def bid_vars(fnm):
    '''
    Adds the cleared quantity of each increment, decrement and
    price-sensitive demand bid, bounded by the total quantity bid
    '''
    model = fnm.model
    for block_type in BID_BLOCK_TYPES:
        _, limits, _ = curve_properties(getattr(model, block_type.curves), block_type.mode)
        ## built right away on a ConcreteModel, so limits is the current one
        def bid_bounds_rule(m, b, t):
            return (0., sum(limits[b,t]))
        model.add_component(block_type.aggregate,
                            Var(model.component(block_type.entities), model.TimePeriods,
                                within=NonNegativeReals, bounds=bid_bounds_rule))
