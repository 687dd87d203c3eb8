#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for limits on generator output and ancillary services
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.generation_limits')

from .mc_utils import add_model_attr, linear_summation
from .status_vars import commitment_status
component_name = 'generation_limits'

@add_model_attr(component_name, requires = {'data_loader': None, 'power_vars': None} )
def generation_limits(fnm):
    '''
    MinimumPowerOutput*UnitOn <= PowerGenerated <= MaximumPowerOutput*UnitOn;
    without commitment variables, the fixed CommitmentStatus replaces UnitOn
    '''
    model = fnm.model
    status = commitment_status(fnm)

    def enforce_generator_output_limits_rule_part_a(m, g, t):
        return (0., m.PowerGenerated[g,t] - m.MinimumPowerOutput[g,t]*status[g,t], None)

    model.EnforceGeneratorOutputLimitsPartA = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_generator_output_limits_rule_part_a)

    def enforce_generator_output_limits_rule_part_b(m, g, t):
        return (None, m.PowerGenerated[g,t] - m.MaximumPowerOutput[g,t]*status[g,t], 0.)

    model.EnforceGeneratorOutputLimitsPartB = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_generator_output_limits_rule_part_b)

@add_model_attr('ancillary_service_limits', requires = {'data_loader': None, 'power_vars': None, 'reserve_vars': None} )
def ancillary_service_limits(fnm):
    '''
    Keeps the reserves of each generator within its operating range:

        RegulationMinimumOutput*s <= PowerGenerated - RegulationReserve
        PowerGenerated + RegulationReserve <= RegulationMaximumOutput*s
        PowerGenerated + RegulationReserve + SpinningReserve
                       + OnlineSupplementalReserve <= MaximumPowerOutput*s
        OfflineSupplementalReserve <= MaximumPowerOutput*(1-s)

    where s is the commitment status and a reserve term only appears for
    the generators offering that service.
    '''
    model = fnm.model
    status = commitment_status(fnm)

    def regulation_lower_limit_rule(m, g, t):
        return (0., m.PowerGenerated[g,t] - m.RegulationReserve[g,t] - m.RegulationMinimumOutput[g,t]*status[g,t], None)

    model.EnforceRegulationLowerLimit = Constraint(model.RegulationProviders, model.TimePeriods, rule=regulation_lower_limit_rule)

    def regulation_upper_limit_rule(m, g, t):
        return (None, m.PowerGenerated[g,t] + m.RegulationReserve[g,t] - m.RegulationMaximumOutput[g,t]*status[g,t], 0.)

    model.EnforceRegulationUpperLimit = Constraint(model.RegulationProviders, model.TimePeriods, rule=regulation_upper_limit_rule)

    online_reserves = ( (model.RegulationReserve, model.RegulationProviders),
                        (model.SpinningReserve, model.SpinningProviders),
                        (model.OnlineSupplementalReserve, model.OnlineSupplementalProviders),
                      )

    def headroom_rule(m, g, t):
        linear_vars = [ reserve[g,t] for reserve, providers in online_reserves if g in providers ]
        ## PowerGenerated <= MaximumPowerOutput*s is in generation_limits
        if not linear_vars:
            return Constraint.Skip
        linear_coefs = [1.]*len(linear_vars)
        linear_vars.append(m.PowerGenerated[g,t])
        linear_coefs.append(1.)
        return (None, linear_summation(linear_vars, linear_coefs) - m.MaximumPowerOutput[g,t]*status[g,t], 0.)

    model.EnforceGeneratorHeadroom = Constraint(model.ThermalGenerators, model.TimePeriods, rule=headroom_rule)

    def offline_supplemental_limit_rule(m, g, t):
        return (None, m.OfflineSupplementalReserve[g,t] + m.MaximumPowerOutput[g,t]*status[g,t], m.MaximumPowerOutput[g,t])

    model.EnforceOfflineSupplementalLimit = Constraint(model.OfflineSupplementalProviders, model.TimePeriods, rule=offline_supplemental_limit_rule)

    logger.debug("Added ancillary service limits, commitment from {}".format(status.name))
