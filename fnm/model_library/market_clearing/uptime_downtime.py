#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## minimum up and down times of the thermal generators
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.uptime_downtime')

from .mc_utils import add_model_attr, linear_summation
component_name = 'uptime_downtime'

def _fix_initial_status(model):
    '''
    Generators which have not been on (off) for their minimum up (down)
    time at t0 keep their initial status for the remaining periods
    '''
    first = model.TimePeriods.first()

    def fix_initial_status_rule(m, g):
        n_periods = max(value(m.InitialTimePeriodsOnLine[g]), value(m.InitialTimePeriodsOffLine[g]))
        status = value(m.UnitOnT0[g])
        for t in range(first, first+n_periods):
            m.UnitOn[g,t].fix(status)

    model.FixInitialStatus = BuildAction(model.ThermalGenerators, rule=fix_initial_status_rule)

def _status_transitions(model):
    '''
    UnitOn[g,t] - UnitOn[g,t-1] == UnitStart[g,t] - UnitStop[g,t],
    with UnitOnT0 in place of UnitOn[g,t-1] in the first period
    '''
    first = model.TimePeriods.first()

    def status_transition_rule(m, g, t):
        linear_vars = [m.UnitOn[g,t], m.UnitStart[g,t], m.UnitStop[g,t]]
        linear_coefs = [1., -1., 1.]
        if t == first:
            return (linear_summation(linear_vars, linear_coefs), value(m.UnitOnT0[g]))
        linear_vars.append(m.UnitOn[g,t-1])
        linear_coefs.append(-1.)
        return (linear_summation(linear_vars, linear_coefs), 0.)

    model.Logical = Constraint(model.ThermalGenerators, model.TimePeriods, rule=status_transition_rule)

def _window_sum(var, g, t, length, status, status_coef):
    ## var[g,i] over the last length periods up to t, plus status_coef*status[g,t]
    linear_vars = [ var[g,i] for i in range(t-length+1, t+1) ]
    linear_coefs = [1.]*len(linear_vars)
    linear_vars.append(status[g,t])
    linear_coefs.append(status_coef)
    return linear_summation(linear_vars, linear_coefs)

@add_model_attr(component_name, requires = {'data_loader': None, 'status_vars': ['commitment_vars']})
def uptime_downtime(fnm):
    '''
    Minimum up and down times as in constraints (3) and (4) of

    D. Rajan and S. Takriti. Minimum up/down polytopes of the unit commitment
    problem with start-up costs. IBM Res. Rep, 2005.

        sum_{i=t-UT+1}^{t} UnitStart[g,i] <= UnitOn[g,t]
        sum_{i=t-DT+1}^{t} UnitStop[g,i] <= 1 - UnitOn[g,t]

    for the periods t with a full window, together with the status
    transitions and the initial status.
    '''
    model = fnm.model
    first = model.TimePeriods.first()

    def uptime_rule(m, g, t):
        length = value(m.ScaledMinimumUpTime[g])
        if t-length+1 < first:
            return Constraint.Skip
        return (None, _window_sum(m.UnitStart, g, t, length, m.UnitOn, -1.), 0.)

    model.UpTime = Constraint(model.ThermalGenerators, model.TimePeriods, rule=uptime_rule)

    def downtime_rule(m, g, t):
        length = value(m.ScaledMinimumDownTime[g])
        if t-length+1 < first:
            return Constraint.Skip
        return (None, _window_sum(m.UnitStop, g, t, length, m.UnitOn, 1.), 1.)

    model.DownTime = Constraint(model.ThermalGenerators, model.TimePeriods, rule=downtime_rule)

    _status_transitions(model)
    _fix_initial_status(model)

    logger.debug("Added minimum up and down times for {} generators".format(len(model.ThermalGenerators)))
