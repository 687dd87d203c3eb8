#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## loads and validates input market clearing data
from pyomo.environ import *

import logging
logger = logging.getLogger('fnm.model_library.market_clearing.params')

from .mc_utils import add_model_attr, uc_time_helper
from .blocks import BlockType
from .zones import MARKET_WIDE_ZONE

component_name = 'data_loader'

## bid_type attribute of the 'bid' elements
BID_TYPES = { BlockType.INCREMENT : 'increment',
              BlockType.DECREMENT : 'decrement',
              BlockType.PRICE_SENSITIVE_DEMAND : 'price_sensitive_demand',
            }

ANCILLARY_SERVICES = ('regulation', 'spinning', 'supplemental_on', 'supplemental_off')

def _restrict(attr, subset):
    ## params over a subset of the generators only take its data
    return { g : v for g, v in attr.items() if g in subset }

def _zone_id(zone):
    if zone is None:
        return None
    return str(zone)

def _hours_to_periods(m, hours):
    ''' hours as a whole number of time periods, within 1..NumTimePeriods '''
    periods = int(round(hours / value(m.TimePeriodLengthHours)))
    return min(max(periods, 1), value(m.NumTimePeriods))

def _load_time(model, system):
    ## time_period_length_minutes must be a whole number of minutes
    model.TimePeriodLengthMinutes = Param(within=PositiveIntegers, initialize=system.get('time_period_length_minutes', 60))
    model.TimePeriodLengthHours = Param(within=PositiveReals, initialize=value(model.TimePeriodLengthMinutes)/60.)

    model.NumTimePeriods = Param(within=PositiveIntegers, initialize=len(system['time_keys']))
    model.InitialTime = Param(within=PositiveIntegers, initialize=1)
    model.TimePeriods = RangeSet(value(model.InitialTime), value(model.NumTimePeriods))

def _load_output_limits(model, gen_attrs, TimeMapper):
    ## MW
    def at_least_pmin(m, v, g, t):
        return v >= value(m.MinimumPowerOutput[g,t])

    model.MinimumPowerOutput = Param(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals, default=0.,
                                     initialize=TimeMapper(gen_attrs.get('p_min', dict())))
    model.MaximumPowerOutput = Param(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals, default=0.,
                                     validate=at_least_pmin,
                                     initialize=TimeMapper(gen_attrs.get('p_max', dict())))

    ## operating range when providing regulation; defaults to the full range
    model.RegulationMinimumOutput = Param(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals,
                                          default=lambda m, g, t: value(m.MinimumPowerOutput[g,t]),
                                          initialize=TimeMapper(gen_attrs.get('regulation_min', dict())))
    model.RegulationMaximumOutput = Param(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals,
                                          default=lambda m, g, t: value(m.MaximumPowerOutput[g,t]),
                                          initialize=TimeMapper(gen_attrs.get('regulation_max', dict())))

    ## used in place of a commitment variable when the model has none
    model.CommitmentStatus = Param(model.ThermalGenerators, model.TimePeriods, within=Binary, default=1,
                                   initialize=TimeMapper(gen_attrs.get('commitment_status', dict())))

def _load_initial_state(model, gen_attrs):
    '''
    Minimum up/down times (hours), the status at t0 and the number of
    periods a generator has to stay in its initial status
    '''
    model.MinimumUpTime = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                initialize=gen_attrs.get('min_up_time', dict()))
    model.MinimumDownTime = Param(model.ThermalGenerators, within=NonNegativeReals, default=0.,
                                  initialize=gen_attrs.get('min_down_time', dict()))

    ## at least one period, or starts and stops would not be limited
    model.ScaledMinimumUpTime = Param(model.ThermalGenerators, within=PositiveIntegers,
                                      initialize=lambda m, g: _hours_to_periods(m, value(m.MinimumUpTime[g])))
    model.ScaledMinimumDownTime = Param(model.ThermalGenerators, within=PositiveIntegers,
                                        initialize=lambda m, g: _hours_to_periods(m, value(m.MinimumDownTime[g])))

    ## hours on (> 0) or off (< 0) up to t0. Without data, a generator
    ## has been on long enough to be shut down in the first period.
    def nonzero(m, v, g):
        return v != 0.

    model.UnitOnT0State = Param(model.ThermalGenerators, within=Reals, validate=nonzero,
                                default=lambda m, g: max(value(m.MinimumUpTime[g]), value(m.TimePeriodLengthHours)),
                                initialize=gen_attrs.get('initial_status', dict()))

    model.UnitOnT0 = Param(model.ThermalGenerators, within=Binary,
                           initialize=lambda m, g: int(value(m.UnitOnT0State[g]) > 0.))

    def remaining_periods(m, min_time, t0_hours):
        hours_left = max(0., min_time - t0_hours)
        if hours_left == 0.:
            return 0
        return min(int(round(hours_left / value(m.TimePeriodLengthHours))), value(m.NumTimePeriods))

    def initial_periods_online_rule(m, g):
        if not value(m.UnitOnT0[g]):
            return 0
        return remaining_periods(m, value(m.MinimumUpTime[g]), value(m.UnitOnT0State[g]))

    def initial_periods_offline_rule(m, g):
        if value(m.UnitOnT0[g]):
            return 0
        return remaining_periods(m, value(m.MinimumDownTime[g]), -value(m.UnitOnT0State[g]))

    model.InitialTimePeriodsOnLine = Param(model.ThermalGenerators, within=NonNegativeIntegers, initialize=initial_periods_online_rule)
    model.InitialTimePeriodsOffLine = Param(model.ThermalGenerators, within=NonNegativeIntegers, initialize=initial_periods_offline_rule)

    ## MW at t0; a generator which is off has no output
    def off_means_zero(m, v, g):
        if not value(m.UnitOnT0[g]) and v != 0.:
            logger.error('Generator {} is off at t0 but has an initial output of {}'.format(g, v))
            return False
        return True

    model.PowerGeneratedT0 = Param(model.ThermalGenerators, within=NonNegativeReals, validate=off_means_zero,
                                   default=lambda m, g: value(m.UnitOnT0[g])*value(m.MinimumPowerOutput[g,value(m.InitialTime)]),
                                   initialize=gen_attrs.get('initial_p_output', dict()))

def _load_ramping(model, gen_attrs, TimeMapper):

    ramp_up = gen_attrs.get('ramp_up_60min', dict())
    ramp_down = gen_attrs.get('ramp_down_60min', dict())

    ## generators without ramp rates are not ramp constrained
    model.RampingGenerators = Set(within=model.ThermalGenerators,
                                  initialize=[g for g in model.ThermalGenerators if g in ramp_up or g in ramp_down])

    ## MW per hour; a missing direction takes the rate of the other one
    model.NominalRampUpLimit = Param(model.RampingGenerators, within=NonNegativeReals,
                                     initialize=lambda m, g: ramp_up.get(g, ramp_down.get(g)))
    model.NominalRampDownLimit = Param(model.RampingGenerators, within=NonNegativeReals,
                                       initialize=lambda m, g: ramp_down.get(g, ramp_up.get(g)))

    ## output allowed in a period of start-up (shut-down), at least the minimum
    ## output; the defaults follow what is in most market manuals
    def at_least_pmin(m, v, g, t):
        return v >= value(m.MinimumPowerOutput[g,t])

    model.StartupRampLimit = Param(model.RampingGenerators, model.TimePeriods, within=NonNegativeReals,
                                   validate=at_least_pmin,
                                   default=lambda m, g, t: value(m.MinimumPowerOutput[g,t]) + value(m.NominalRampUpLimit[g])/2.,
                                   initialize=TimeMapper(_restrict(gen_attrs.get('startup_capacity', dict()), model.RampingGenerators)))
    model.ShutdownRampLimit = Param(model.RampingGenerators, model.TimePeriods, within=NonNegativeReals,
                                    validate=at_least_pmin,
                                    default=lambda m, g, t: value(m.MinimumPowerOutput[g,t]) + value(m.NominalRampDownLimit[g])/2.,
                                    initialize=TimeMapper(_restrict(gen_attrs.get('shutdown_capacity', dict()), model.RampingGenerators)))

    ## MW per time period, no more than the output range it applies to
    def ramp_up_per_period(m, g, t):
        return min(value(m.NominalRampUpLimit[g])*value(m.TimePeriodLengthHours), value(m.MaximumPowerOutput[g,t]))

    def ramp_down_per_period(m, g, t):
        if t == value(m.InitialTime):
            previous_max = max(value(m.PowerGeneratedT0[g]), value(m.MaximumPowerOutput[g,t]))
        else:
            previous_max = value(m.MaximumPowerOutput[g,t-1])
        return min(value(m.NominalRampDownLimit[g])*value(m.TimePeriodLengthHours), previous_max)

    model.ScaledNominalRampUpLimit = Param(model.RampingGenerators, model.TimePeriods, within=NonNegativeReals, initialize=ramp_up_per_period)
    model.ScaledNominalRampDownLimit = Param(model.RampingGenerators, model.TimePeriods, within=NonNegativeReals, initialize=ramp_down_per_period)

def _load_costs_and_services(model, gen_attrs, TimeMapper):

    ## offer curves are plain dictionaries, the number of blocks varies with (g,t)
    model.OfferCurves = TimeMapper(gen_attrs.get('offer_curve', dict()))
    for g in model.ThermalGenerators:
        for t in model.TimePeriods:
            if (g,t) not in model.OfferCurves:
                logger.warning("Generator {} has no offer curve for time period {}, it will be offered at no cost".format(g,t))
                model.OfferCurves[g,t] = [(0., value(model.MaximumPowerOutput[g,t]))]

    model.NoLoadCost = Param(model.ThermalGenerators, model.TimePeriods, within=Reals, default=0.,
                             initialize=TimeMapper(gen_attrs.get('no_load_cost', dict())))
    model.StartupCost = Param(model.ThermalGenerators, model.TimePeriods, within=Reals, default=0.,
                              initialize=TimeMapper(gen_attrs.get('start_up_cost', dict())))

    services = gen_attrs.get('ancillary_services', dict())
    for g, offered in services.items():
        for s in offered:
            if s not in ANCILLARY_SERVICES:
                logger.warning("Generator {} offers unrecognized ancillary service {}, ignoring it".format(g, s))

    for service, providers, cost_name, cost_attr in (
            ('regulation', 'RegulationProviders', 'RegulationCost', 'regulation_cost'),
            ('spinning', 'SpinningProviders', 'SpinningCost', 'spinning_cost'),
            ('supplemental_on', 'OnlineSupplementalProviders', 'OnlineSupplementalCost', 'supplemental_on_cost'),
            ('supplemental_off', 'OfflineSupplementalProviders', 'OfflineSupplementalCost', 'supplemental_off_cost'),
            ):
        provider_set = Set(within=model.ThermalGenerators,
                           initialize=[g for g in model.ThermalGenerators if service in services.get(g, ())])
        model.add_component(providers, provider_set)
        model.add_component(cost_name,
                            Param(provider_set, model.TimePeriods, within=Reals, default=0.,
                                  initialize=TimeMapper(_restrict(gen_attrs.get(cost_attr, dict()), provider_set))))

def _load_reserve_zones(model, gen_attrs, zone_attrs, TimeMapper):

    ## zone ids are strings, as they are when read back from json
    zone_tags = gen_attrs.get('reserve_zone', dict())
    model.GeneratorReserveZone = { g : _zone_id(zone_tags.get(g)) for g in model.ThermalGenerators }

    ## zones with data, then the ones only generators name, then the market-wide zone
    zones = [ _zone_id(z) for z in zone_attrs['names'] ]
    for z in list(model.GeneratorReserveZone.values()) + [MARKET_WIDE_ZONE]:
        if z is not None and z not in zones:
            zones.append(z)
    model.ReserveZones = Set(initialize=zones)

    def _requirement(attr):
        return TimeMapper({ _zone_id(z) : req for z, req in zone_attrs.get(attr, dict()).items() })

    model.RegulationRequirement = Param(model.ReserveZones, model.TimePeriods, within=NonNegativeReals, default=0.,
                                        initialize=_requirement('regulation_requirement'))
    model.OperatingReserveRequirement = Param(model.ReserveZones, model.TimePeriods, within=NonNegativeReals, default=0.,
                                              initialize=_requirement('operating_reserve_requirement'))

def _load_demand_and_bids(model, load_attrs, bid_attrs, TimeMapper):

    model.Loads = Set(initialize=load_attrs['names'])
    load_time = TimeMapper(load_attrs.get('p_load', dict()))
    model.TotalDemand = Param(model.TimePeriods, within=Reals,
                              initialize=lambda m, t: sum(load_time.get((l,t), 0.) for l in m.Loads))

    for block_type, attrs in bid_attrs.items():
        model.add_component(block_type.entities, Set(initialize=attrs['names']))
        curves = TimeMapper(attrs.get('bid_curve', dict()))
        for b in attrs['names']:
            for t in model.TimePeriods:
                if (b,t) not in curves:
                    logger.warning("Bid {} has no bid curve for time period {}, it will not clear".format(b,t))
                    curves[b,t] = list()
        setattr(model, block_type.curves, curves)

@add_model_attr(component_name)
def load_params(fnm, model_data):
    '''
    Loads the sets, params and curves of a ModelData into fnm.model
    '''
    model = fnm.model
    model.model_data = model_data
    elements = model_data.data['elements']

    for element_type in ('generator', 'bid', 'load', 'reserve_zone'):
        elements.setdefault(element_type, dict())

    gen_attrs = model_data.attributes(element_type='generator', generator_type='thermal')
    load_attrs = model_data.attributes(element_type='load')
    zone_attrs = model_data.attributes(element_type='reserve_zone')
    bid_attrs = { block_type : model_data.attributes(element_type='bid', bid_type=bid_type)
                    for block_type, bid_type in BID_TYPES.items() }

    _load_time(model, model_data.data['system'])
    TimeMapper = uc_time_helper(model.TimePeriods)

    model.ThermalGenerators = Set(initialize=gen_attrs['names'])

    _load_output_limits(model, gen_attrs, TimeMapper)
    _load_initial_state(model, gen_attrs)
    _load_ramping(model, gen_attrs, TimeMapper)
    _load_costs_and_services(model, gen_attrs, TimeMapper)
    _load_reserve_zones(model, gen_attrs, zone_attrs, TimeMapper)
    _load_demand_and_bids(model, load_attrs, bid_attrs, TimeMapper)

    logger.debug("Loaded {} thermal generators, {} bids, {} loads and {} reserve zones over {} time periods"\
                 .format(len(model.ThermalGenerators), sum(len(attrs['names']) for attrs in bid_attrs.values()),
                         len(model.Loads), len(model.ReserveZones), value(model.NumTimePeriods)))

    return model
