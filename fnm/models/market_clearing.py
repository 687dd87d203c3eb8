#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
This module provides functions that create the models for some typical
market clearing problems
'''

from fnm.common.log import logger
from fnm.models.full_network_model import FullNetworkModel
from fnm.model_library.market_clearing.mc_utils import expand_slacks
from fnm.model_library.market_clearing.status_vars import commitment_vars
from fnm.model_library.market_clearing.power_vars import thermal_generation_vars
from fnm.model_library.market_clearing.reserve_vars import ancillary_service_vars
from fnm.model_library.market_clearing.bid_vars import bid_vars
from fnm.model_library.market_clearing.generation_limits import generation_limits, ancillary_service_limits
from fnm.model_library.market_clearing.ramping_limits import ramp_limits
from fnm.model_library.market_clearing.uptime_downtime import uptime_downtime
from fnm.model_library.market_clearing.reserve_requirement import regulation_requirements, operating_reserve_requirements
from fnm.model_library.market_clearing.power_balance import energy_balance
from fnm.model_library.market_clearing.production_costs import thermal_variable_cost, thermal_noload_cost
from fnm.model_library.market_clearing.startup_costs import thermal_startup_cost
from fnm.model_library.market_clearing.ancillary_costs import ancillary_service_costs
from fnm.model_library.market_clearing.bid_costs import bid_costs

def _add_dispatch(fnm, slacks):
    thermal_generation_vars(fnm)
    ancillary_service_vars(fnm)
    bid_vars(fnm)

    thermal_variable_cost(fnm)
    thermal_noload_cost(fnm)
    ancillary_service_costs(fnm)
    bid_costs(fnm)

    generation_limits(fnm)
    ancillary_service_limits(fnm)
    ramp_limits(fnm)

    regulation_requirements(fnm, slacks['regulation_requirements'])
    operating_reserve_requirements(fnm, slacks['operating_reserve_requirements'])
    energy_balance(fnm, slacks['energy_balance'])

def create_unit_commitment_model(model_data, relaxed=False, slack=None):
    '''
    Create a new day-ahead market clearing model with commitment decisions,
    offer and bid curves, ancillary services and zonal reserve requirements

    Parameters
    ----------
    model_data : fnm.data.model_data.ModelData
        Market data
    relaxed : bool (optional)
        If True, the commitment variables are continuous in [0,1]
    slack : None, number, dict, or list of pairs (optional)
        Slack penalties of the soft constraints, see
        fnm.model_library.market_clearing.mc_utils.expand_slacks

    Returns
    -------
        fnm.models.full_network_model.FullNetworkModel
    '''
    slacks = expand_slacks(slack)
    fnm = FullNetworkModel(model_data, relax_binaries=relaxed, name='UnitCommitment')

    commitment_vars(fnm)
    _add_dispatch(fnm, slacks)
    thermal_startup_cost(fnm)
    uptime_downtime(fnm)

    logger.debug("Created {}".format(fnm))
    return fnm

def create_economic_dispatch_model(model_data, slack=None):
    '''
    Create a new market clearing model for the fixed commitment given by
    the commitment_status of the generators; the offer curve blocks of
    this model have static bounds

    Parameters
    ----------
    model_data : fnm.data.model_data.ModelData
        Market data
    slack : None, number, dict, or list of pairs (optional)
        Slack penalties of the soft constraints, see
        fnm.model_library.market_clearing.mc_utils.expand_slacks

    Returns
    -------
        fnm.models.full_network_model.FullNetworkModel
    '''
    slacks = expand_slacks(slack)
    fnm = FullNetworkModel(model_data, name='EconomicDispatch')

    _add_dispatch(fnm, slacks)

    logger.debug("Created {}".format(fnm))
    return fnm
