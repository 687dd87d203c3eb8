#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Helpers shared by the market clearing formulation steps
"""
from functools import wraps
from numbers import Number
from pyomo.environ import quicksum

import warnings

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.mc_utils')

from fnm.common.errors import ConfigurationError

## constraints which can be given a slack penalty
SOFT_CONSTRAINTS = ('energy_balance',
                    'regulation_requirements',
                    'operating_reserve_requirements',
                   )

def _warn(msg):
    logger.warning(msg)
    warnings.warn(msg)

def add_model_attr(attr, requires = {}):
    '''
    Decorator for formulation steps, which take the model wrapper as their
    first argument. The step sets fnm.<attr> to its own name. It warns if
    fnm.<attr> was set already, or if a step of each kind in requires was
    not added before; requires maps a kind to None (any step of that kind
    will do) or to the list of acceptable step names.
    '''
    def decorator(func):
        @wraps(func)
        def step(*args, **kwds):
            fnm = args[0]
            previous = getattr(fnm, attr, None)
            if previous is not None:
                _warn("{}: the model already has {} {}; only one step of this kind should be added"\
                      .format(func.__name__, attr, previous))
            for kind, accepted in requires.items():
                added = getattr(fnm, kind, None)
                if added is None:
                    _warn("{}: needs some {} to be added first".format(func.__name__, kind))
                elif accepted is not None and added not in accepted:
                    _warn("{}: needs one of {} to be added first, not {}"\
                          .format(func.__name__, ", ".join(accepted), added))
            setattr(fnm, attr, func.__name__)
            return func(*args, **kwds)
        return step
    return decorator

def uc_time_helper(model_time_periods):
    '''
    Returns a function which maps market data attributes onto the time
    periods, as initializers for pyomo params:

        None or {}                  -> {}
        time series                 -> {t: value}
        {key: value or time series} -> {(key, t): value}
        anything else               -> {t: value}

    Values which are not time series are used in every period.
    '''
    time_periods = list(model_time_periods)

    def _is_time_series(att):
        return isinstance(att, dict) and att.get('data_type') == 'time_series'

    def _over_time(att):
        if _is_time_series(att):
            if len(att['values']) != len(time_periods):
                raise ConfigurationError("Time series has {} values but there are {} time periods"\
                                         .format(len(att['values']), len(time_periods)))
            return zip(time_periods, att['values'])
        return ((t, att) for t in time_periods)

    def time_mapper(data):
        if data is None or data == dict():
            return dict()
        if isinstance(data, dict) and not _is_time_series(data):
            return { (key, t) : val for key, att in data.items() for t, val in _over_time(att) }
        return { t : val for t, val in _over_time(data) }

    return time_mapper

def linear_summation(linear_vars, linear_coefs, constant=0.):
    return quicksum((c*v for c,v in zip(linear_coefs, linear_vars)), start=constant)

def expand_slacks(slacks=None):
    '''
    Returns a dict with the slack penalty for each soft constraint; a
    penalty of None means the constraint is hard.

    Parameters
    ----------
    slacks : None, number, dict, a (name, penalty) pair, or list of such pairs
        If None or a number, that value is used for every soft constraint.
        Otherwise only the named constraints get a penalty; the rest
        are hard.

    Raises
    ------
    ConfigurationError
        If a name is not one of SOFT_CONSTRAINTS, or slacks has none
        of the shapes above
    '''
    if slacks is None or isinstance(slacks, Number):
        return {con: slacks for con in SOFT_CONSTRAINTS}

    if isinstance(slacks, tuple) and len(slacks) == 2 and isinstance(slacks[0], str):
        slacks = [slacks]
    try:
        slacks = dict(slacks)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("Cannot read slack penalties from {!r}".format(slacks)) from e
    unrecognized = [name for name in slacks if name not in SOFT_CONSTRAINTS]
    if unrecognized:
        raise ConfigurationError("Unrecognized soft constraint(s): {}. Possible soft constraints are: {}"\
                                 .format(", ".join(map(str, unrecognized)), ", ".join(SOFT_CONSTRAINTS)))

    expanded = {con: None for con in SOFT_CONSTRAINTS}
    expanded.update(slacks)
    return expanded
