#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the costs of ancillary services
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.ancillary_costs')

from .mc_utils import add_model_attr
from .objective import linear_cost
component_name = 'ancillary_costs'

## variable name, cost param, set of providers
ANCILLARY_COSTS = ( ('RegulationReserve', 'RegulationCost', 'RegulationProviders'),
                    ('SpinningReserve', 'SpinningCost', 'SpinningProviders'),
                    ('OnlineSupplementalReserve', 'OnlineSupplementalCost', 'OnlineSupplementalProviders'),
                    ('OfflineSupplementalReserve', 'OfflineSupplementalCost', 'OfflineSupplementalProviders'),
                  )

@add_model_attr(component_name, requires = {'data_loader': None, 'reserve_vars': None})
def ancillary_service_costs(fnm):
    '''
    Adds the offer cost of each ancillary service to the objective
    '''
    model = fnm.model
    cost = 0.
    for varname, cost_name, providers in ANCILLARY_COSTS:
        cost = cost + linear_cost(fnm, varname, model.component(cost_name), model.component(providers))
    fnm.objective.add(cost)
    logger.debug("Added the costs of {} ancillary services".format(len(ANCILLARY_COSTS)))
    return cost
