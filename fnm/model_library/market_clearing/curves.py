#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Properties of offer and bid curves.

A curve is an ordered list of (price, MW) pairs for one entity in one time
period. Offer curves of thermal generators are cumulative: the MW value is the
total output available at or below the price. Bid curves are given as blocks:
the MW value is the size of the block itself.
"""
from enum import Enum

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.curves')

from fnm.common.errors import ConfigurationError

class CurveMode(Enum):
    '''
    CUMULATIVE: MW values are cumulative, e.g. (50, 100, 200) are blocks of (50, 50, 100)
    BLOCK: MW values are the block sizes themselves
    '''
    CUMULATIVE = 1
    BLOCK = 2

def curve_properties(curves, mode=CurveMode.CUMULATIVE):
    '''
    Returns the prices, the block MW limits and the number of blocks of each
    curve in curves.

    Parameters
    ----------
    curves : dict
        (name, t) -> list of (price, MW) pairs. Not modified.
    mode : CurveMode
        Whether the MW values are cumulative or block sizes.

    Returns
    -------
        tuple of dicts (prices, limits, n_blocks), all keyed by (name, t);
        prices[name, t][q] and limits[name, t][q] are the price and MW limit
        of block q (0-based), and n_blocks[name, t] == len(limits[name, t])

    Raises
    ------
    ConfigurationError
        If a cumulative curve has a decreasing MW value, which would
        give a negative block limit.
    '''
    prices = dict()
    limits = dict()
    n_blocks = dict()
    for key, curve in curves.items():
        prices[key] = [ float(pair[0]) for pair in curve ]
        lims = [ float(pair[1]) for pair in curve ]
        if mode == CurveMode.CUMULATIVE:
            ## last block first, so that lims[q-1] is still the cumulative value
            for q in range(len(lims)-1, 0, -1):
                lims[q] -= lims[q-1]
        for q, lim in enumerate(lims):
            if lim < 0.:
                if mode == CurveMode.CUMULATIVE:
                    reason = "MW values of a cumulative curve must be non-decreasing"
                else:
                    reason = "block sizes must be non-negative"
                raise ConfigurationError("Curve for {} has a negative MW limit {} at block {}; {}"\
                                         .format(key, lim, q+1, reason))
        limits[key] = lims
        n_blocks[key] = len(lims)
    logger.debug("Computed properties of {} {} curves".format(len(curves), mode.name.lower()))
    return prices, limits, n_blocks
