#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Market data for FNM models is a nested dictionary with two top-level keys:

.. code-block:: python

    {
    'elements': { <element-type>: { <element-name>: { <attribute>: <value>, ... } } },
    'system': { <attribute>: <value>, ... },
    }

The element types read by the market clearing data loader are 'generator'
(with 'generator_type' == 'thermal'), 'bid' (with 'bid_type' one of
'increment', 'decrement', 'price_sensitive_demand'), 'load' and
'reserve_zone'. Elements with 'in_service' set to False are ignored.

An attribute value is used for every time period, unless it is a time
series, i.e., a dictionary {'data_type': 'time_series', 'values': [...]}
with one value per entry of data['system']['time_keys']. Offer and bid
curves are lists of (price, MW) pairs, or time series of such lists.

A market with one generator, one increment bid, one load and the
market-wide reserve requirement over two hours:

.. code-block:: python

    {
    'elements': {
        'generator': {
            'G3': {'generator_type': 'thermal', 'p_min': 0.5, 'p_max': 8.0,
                   'offer_curve': [(600., 0.5), (800., 1.0), (825., 5.0)],
                   'ancillary_services': ['regulation'], 'regulation_cost': 20000.,
                   'reserve_zone': '1'},
            },
        'bid': {
            'IB1': {'bid_type': 'increment', 'bid_curve': [(300., 0.2), (700., 0.3)]},
            },
        'load': {
            'L1': {'p_load': {'data_type': 'time_series', 'values': [2.0, 2.5]}},
            },
        'reserve_zone': {
            'market_wide': {'regulation_requirement': 0.3},
            },
        },
    'system': {'time_keys': [1, 2], 'time_period_length_minutes': 60},
    }
"""
import logging
import copy as cp
import gzip
import json
import fnm.data.data_utils as du
logger = logging.getLogger('fnm.data.model_data')

class ModelData(object):
    '''
    Wraps a market data dictionary (see the module documentation), kept
    in the data attribute.
    '''

    @staticmethod
    def empty_model_data_dict():
        return {"elements": dict(), "system": dict()}

    def __init__(self, source=None, file_type=None):
        """
        Parameters
        ----------
        source : dict, str, ModelData, or None (optional)
            A market data dictionary, which is used (not copied); a path
            to a json or json.gz file; a ModelData, which is deep copied;
            or None for empty data.
        file_type : str or None (optional)
            'json' or 'json.gz' if source is a path. By default it is
            taken from the file extension.
        """
        if isinstance(source, dict):
            self.data = source
        elif isinstance(source, str):
            self.data = du.read_from_file(source, file_type)
        elif isinstance(source, ModelData):
            self.data = source.clone().data
        elif source is None:
            self.data = ModelData.empty_model_data_dict()
        else:
            raise RuntimeError("Cannot create ModelData from a {}".format(type(source).__name__))

    @classmethod
    def read(cls, filename, file_type=None):
        return cls(source=du.read_from_file(filename, file_type))

    def elements(self, element_type, **kwargs):
        """
        Yields the (name, attribute dict) pairs of the elements of element_type
        whose attributes match every key=value pair in kwargs; nothing if
        there are no elements of that type.
        """
        for name, elem in self.data['elements'].get(element_type, dict()).items():
            if all(k in elem and elem[k] == v for k, v in kwargs.items()):
                yield name, elem

    def attributes(self, element_type, **kwargs):
        """
        Returns the attributes of the matching elements (see elements)
        keyed first by attribute, then by element name:

            attrs[<attribute>][<element-name>] = <value>

        attrs['names'] lists the matching element names in order. Returns
        None if the data has no elements of element_type.
        """
        if element_type not in self.data['elements']:
            return None

        attrs = {'names': list()}
        for name, elem in self.elements(element_type, **kwargs):
            attrs['names'].append(name)
            for attr, value in elem.items():
                attrs.setdefault(attr, dict())[name] = value
        return attrs

    def clone(self):
        ''' A deep copy of this ModelData '''
        return ModelData(cp.deepcopy(self.data))

    def clone_in_service(self):
        ''' A deep copy of this ModelData without the elements which are out of service '''
        return ModelData(du.copy_in_service(self.data))

    def write(self, filename, file_type=None):
        """
        Writes the data to filename as json, or as gzipped json

        Parameters
        ----------
        filename : str
        file_type : str or None (optional)
            'json' or 'json.gz'. By default it is taken from the extension
            of filename, and is 'json' for other extensions.
        """
        if file_type is None:
            file_type = du.infer_file_type(filename, strict=False)
            if file_type is None:
                logger.warning("Cannot tell the file type of {} from its extension, writing json".format(filename))
                file_type = 'json'
        du.check_file_type(file_type)

        if file_type == 'json.gz':
            with gzip.open(filename, 'wt') as f:
                json.dump(self.data, f)
        else:
            with open(filename, 'w') as f:
                json.dump(self.data, f)
        logger.debug("Wrote market data to {}".format(filename))
