#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for ancillary service variables
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.reserve_vars')

from .mc_utils import add_model_attr
component_name = 'reserve_vars'

## variable name -> set of providers
RESERVE_VARS = ( ('RegulationReserve', 'RegulationProviders'),
                 ('SpinningReserve', 'SpinningProviders'),
                 ('OnlineSupplementalReserve', 'OnlineSupplementalProviders'),
                 ('OfflineSupplementalReserve', 'OfflineSupplementalProviders'),
               )

@add_model_attr(component_name, requires = {'data_loader': None} )
def ancillary_service_vars(fnm):
    '''
    Adds one reserve variable per ancillary service, over the generators
    which offer that service
    '''
    model = fnm.model
    for varname, providers in RESERVE_VARS:
        model.add_component(varname, Var(model.component(providers), model.TimePeriods, within=NonNegativeReals))
        logger.debug("Added {} for {} providers".format(varname, len(model.component(providers))))
