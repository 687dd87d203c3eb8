#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for ramping constraints
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.ramping_limits')

from .mc_utils import add_model_attr
from .status_vars import commitment_status
component_name = 'ramping_limits'

@add_model_attr(component_name, requires = {'data_loader': None, 'power_vars': None} )
def ramp_limits(fnm):
    '''
    Ramping constraints for the generators in RampingGenerators, with start-up
    and shut-down allowances, as in

    Arroyo, J. and Conejo, A. (2004) Modeling of Start-Up and Shut-Down Power
    Trajectories of Thermal Units. IEEE Transactions on Power Systems,
    Vol. 19, No. 3, Aug 2004.

        p[t] - p[t-1] <= RU*u[t-1] + SU*v[t]
        p[t-1] - p[t] <= RD*u[t] + SD*w[t]

    Without commitment variables, u is the fixed CommitmentStatus and the
    starts v and stops w follow from its changes.
    '''
    model = fnm.model
    status = commitment_status(fnm)
    unit_start = fnm.find_variable('UnitStart')
    unit_stop = fnm.find_variable('UnitStop')

    initial_time = value(model.InitialTime)

    def _previous_output(m, g, t):
        if t == initial_time:
            return m.PowerGeneratedT0[g]
        return m.PowerGenerated[g,t-1]

    def _previous_status(m, g, t):
        if t == initial_time:
            return m.UnitOnT0[g]
        return status[g,t-1]

    def _start(m, g, t):
        if unit_start is not None:
            return unit_start[g,t]
        return max(0, value(status[g,t]) - value(_previous_status(m,g,t)))

    def _stop(m, g, t):
        if unit_stop is not None:
            return unit_stop[g,t]
        return max(0, value(_previous_status(m,g,t)) - value(status[g,t]))

    def enforce_max_available_ramp_up_rates_rule(m, g, t):
        return (None, m.PowerGenerated[g,t] - _previous_output(m,g,t) \
                        - m.ScaledNominalRampUpLimit[g,t]*_previous_status(m,g,t) \
                        - m.StartupRampLimit[g,t]*_start(m,g,t), 0.)

    model.EnforceMaxAvailableRampUpRates = Constraint(model.RampingGenerators, model.TimePeriods, rule=enforce_max_available_ramp_up_rates_rule)

    def enforce_ramp_down_limits_rule(m, g, t):
        return (None, _previous_output(m,g,t) - m.PowerGenerated[g,t] \
                        - m.ScaledNominalRampDownLimit[g,t]*status[g,t] \
                        - m.ShutdownRampLimit[g,t]*_stop(m,g,t), 0.)

    model.EnforceScaledNominalRampDownLimits = Constraint(model.RampingGenerators, model.TimePeriods, rule=enforce_ramp_down_limits_rule)

    logger.debug("Added ramping limits for {} generators".format(len(model.RampingGenerators)))
