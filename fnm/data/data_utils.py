#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Helpers for reading, writing and copying market data dictionaries
"""
import copy as cp
import gzip
import json

valid_file_types = ('json', 'json.gz')

def copy_in_service(data_dict):
    ''' Deep copy of data_dict, skipping elements whose in_service is False '''
    elements = { element_type : { name : cp.deepcopy(elem) for name, elem in elems.items()
                                    if elem.get('in_service', True) }
                   for element_type, elems in data_dict.get('elements', dict()).items() }
    copied = { key : cp.deepcopy(value) for key, value in data_dict.items() if key != 'elements' }
    copied['elements'] = elements
    return copied

def check_file_type(file_type):
    if file_type not in valid_file_types:
        raise ValueError("Unrecognized file_type {}; expected one of {}".format(file_type, ", ".join(valid_file_types)))

def infer_file_type(filename, strict=True):
    ''' The file type given by the extension of filename, or None if not strict '''
    for file_type in sorted(valid_file_types, key=len, reverse=True):
        if filename.endswith('.'+file_type):
            return file_type
    if strict:
        raise ValueError("Cannot tell the file type of {} from its extension".format(filename))
    return None

def read_from_file(filename, file_type=None):
    if file_type is None:
        file_type = infer_file_type(filename)
    check_file_type(file_type)

    if file_type == 'json.gz':
        with gzip.open(filename, 'rt') as f:
            return json.load(f)
    with open(filename) as f:
        return json.load(f)
