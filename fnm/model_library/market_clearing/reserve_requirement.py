#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## zonal reserve requirements
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.reserve_requirement')

from fnm.common.errors import ConfigurationError
from .mc_utils import add_model_attr, linear_summation
from .zones import generators_by_reserve_zone

def _add_reserve_shortfall(fnm, shortfall_name, requirement, slack_penalty):
    ''' Adds the shortfall variables and their penalty; returns None for a hard requirement '''
    if slack_penalty is None:
        return None
    model = fnm.model
    # the shortfall can't be more than the requirement in any given time period.
    shortfall = Var(model.ReserveZones, model.TimePeriods, within=NonNegativeReals,
                    bounds=lambda m,z,t:(0., requirement[z,t]))
    model.add_component(shortfall_name, shortfall)
    fnm.objective.add(linear_summation([shortfall[z,t] for z in model.ReserveZones for t in model.TimePeriods],
                                       [slack_penalty]*(len(model.ReserveZones)*len(model.TimePeriods))))
    return shortfall

def _add_zonal_requirement(fnm, constraint_name, requirement, reserves, shortfall):
    '''
    Adds, for every reserve zone z and time period t,

        sum_{(r, providers) in reserves} sum_{g in zone z and providers} r[g,t]
            + shortfall[z,t] >= requirement[z,t]
    '''
    model = fnm.model
    zone_generators = generators_by_reserve_zone(fnm)

    def zonal_requirement_rule(m, z, t):
        linear_vars = [ reserve[g,t] for reserve, providers in reserves
                                     for g in zone_generators[z] if g in providers ]
        if shortfall is not None:
            linear_vars.append(shortfall[z,t])
        req = value(requirement[z,t])
        if not linear_vars:
            if req > 0.:
                raise ConfigurationError("{}: reserve zone {} has a requirement of {} in time period {} "
                                         "but no generator in it can provide the reserve"\
                                         .format(constraint_name, z, req, t))
            return Constraint.Skip
        return (req, linear_summation(linear_vars, [1.]*len(linear_vars)), None)

    model.add_component(constraint_name,
                        Constraint(model.ReserveZones, model.TimePeriods, rule=zonal_requirement_rule))
    logger.debug("Added {} over {} reserve zones{}".format(constraint_name, len(model.ReserveZones),
                 "" if shortfall is None else ", with shortfall"))

@add_model_attr('regulation_requirements', requires = {'data_loader': None, 'reserve_vars': None})
def regulation_requirements(fnm, slack_penalty=None):
    '''
    Regulation cleared in each reserve zone meets its RegulationRequirement;
    with a slack_penalty the shortfall is allowed at that price per MW.
    '''
    model = fnm.model
    shortfall = _add_reserve_shortfall(fnm, 'RegulationShortfall', model.RegulationRequirement, slack_penalty)
    _add_zonal_requirement(fnm, 'EnforceRegulationRequirement', model.RegulationRequirement,
                           ((model.RegulationReserve, model.RegulationProviders),),
                           shortfall)

@add_model_attr('operating_reserve_requirements', requires = {'data_loader': None, 'reserve_vars': None})
def operating_reserve_requirements(fnm, slack_penalty=None):
    '''
    The operating reserve cleared in each reserve zone (regulation, spinning,
    online and offline supplemental) meets its OperatingReserveRequirement;
    with a slack_penalty the shortfall is allowed at that price per MW.
    '''
    model = fnm.model
    shortfall = _add_reserve_shortfall(fnm, 'OperatingReserveShortfall', model.OperatingReserveRequirement, slack_penalty)
    _add_zonal_requirement(fnm, 'EnforceOperatingReserveRequirement', model.OperatingReserveRequirement,
                           ( (model.RegulationReserve, model.RegulationProviders),
                             (model.SpinningReserve, model.SpinningProviders),
                             (model.OnlineSupplementalReserve, model.OnlineSupplementalProviders),
                             (model.OfflineSupplementalReserve, model.OfflineSupplementalProviders),
                           ),
                           shortfall)
