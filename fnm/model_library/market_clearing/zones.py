#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## grouping of generators by reserve zone
import logging
logger = logging.getLogger('fnm.model_library.market_clearing.zones')

## the zone holding the requirements which apply to the whole market
MARKET_WIDE_ZONE = 'market_wide'

def reserve_zone_members(zone_tags, zones=None, market_wide_zone=MARKET_WIDE_ZONE):
    '''
    Returns a dict zone -> list of the entities in that zone.

    Parameters
    ----------
    zone_tags : dict
        entity -> zone, or None for entities without a zone
    zones : iterable (optional)
        The zones to report. Defaults to every zone found in zone_tags.
        The market-wide zone is always included.
    market_wide_zone : (optional)
        The id of the market-wide zone, which contains every entity
        regardless of its tag.
    '''
    if zones is None:
        zones = [ z for z in dict.fromkeys(zone_tags.values()) if z is not None ]
    members = { z : list() for z in zones if z != market_wide_zone }
    for entity, zone in zone_tags.items():
        if zone in members:
            members[zone].append(entity)
    members[market_wide_zone] = list(zone_tags)
    return members

def generators_by_reserve_zone(fnm):
    '''
    Returns the thermal generators of fnm in each of its reserve zones
    '''
    model = fnm.model
    zone_tags = { g : model.GeneratorReserveZone[g] for g in model.ThermalGenerators }
    members = reserve_zone_members(zone_tags, zones=model.ReserveZones)
    for z, gens in members.items():
        if not gens:
            logger.debug("Reserve zone {} has no thermal generators".format(z))
    return members
