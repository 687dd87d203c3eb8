#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the costs of virtual and demand bids
from .mc_utils import add_model_attr
from .bid_vars import BID_BLOCK_TYPES
from .production_costs import block_cost
component_name = 'bid_costs'

@add_model_attr(component_name, requires = {'data_loader': None, 'bid_vars': None})
def bid_costs(fnm):
    '''
    Formulates the bid curves with blocks: increment bids are paid their
    bid price, cleared decrement and price-sensitive demand bids are
    valued at theirs.
    '''
    for block_type in BID_BLOCK_TYPES:
        block_cost(fnm, block_type)
