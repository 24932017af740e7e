#! /usr/bin/env python
""" Validation throughput on generated schemas.

Prints gnuplot-friendly datasets to stdout, and the averages to stderr:

    $ python misc/performance/benchmark.py 1000 1 20 > benchmark.dat
"""

import goal

import itertools
from datetime import datetime
from random import choice, randrange


def generate_random_field(valid):
    """ Generate a random field rule set and samples for it.

    :param valid: Generate valid samples?
    :type valid: bool
    :return: rules, sample-generator
    :rtype: dict, generator
    """
    type = choice(['integer', 'string', 'enum'])

    r = lambda: randrange(-1000000000, 1000000000)

    if type == 'integer':
        return {'type': 'integer'}, (str(r()) if valid else 'x{}'.format(r()) for i in itertools.count())
    elif type == 'string':
        return {'type': 'string', 'squish': True, 'max': 12}, (' {} '.format(r()) if valid else r()
                                                                for i in itertools.count())
    elif type == 'enum':
        values = ['draft', 'pending', 'done']
        return {'type': 'enum', 'values': values}, (choice(values) if valid else 'unknown'
                                                   for i in itertools.count())
    else:
        raise AssertionError('!')


def generate_map_schema(size, valid):
    """ Generate a schema of size `size`, with a nested map and an array of maps.

    In addition, it returns samples generator

    :param size: Schema size
    :type size: int
    :param valid: Generate valid samples?
    :type valid: bool
    :returns: schema, sample-generator
    :rtype: dict, generator
    """
    schema = {}
    generator_items = []

    # Generate schema
    for i in range(0, size):
        rules, value_generator = generate_random_field(valid)
        key = 'field_{}'.format(i)

        schema[key] = dict(rules, required=True)
        generator_items.append((key, value_generator))

    # Nest it
    schema = {
        'id': {'type': 'integer', 'required': True},
        'data': {'type': 'map', 'required': True, 'properties': schema},
        'items': {'type': ('array', 'map'), 'properties': schema},
    }

    # Samples
    def sample():
        data = {key: next(v_gen) for key, v_gen in generator_items}
        return {'id': '1', 'data': data, 'items': [data, data]}
    generator = (sample() for i in itertools.count())

    # Finish
    return schema, generator


if __name__ == '__main__':
    import sys
    import argparse
    from collections import defaultdict

    parser = argparse.ArgumentParser(prog='Benchmark')
    parser.add_argument('samples', type=int, help='The number of samples to test with')
    parser.add_argument('size_min', type=int, help='Min schema size')
    parser.add_argument('size_max', type=int, help='Max schema size')
    args = parser.parse_args()

    # Test on both valid and invalid samples
    results = defaultdict(list)
    for valid in (True, False):
        for size in range(args.size_min, args.size_max + 1):
            # Generate samples
            schema, gen = generate_map_schema(size, valid)
            samples = list(sample for i, sample in zip(range(0, args.samples), gen))

            compiled_schema = goal.Schema(schema)

            # Now do validation
            start = datetime.utcnow()
            for sample in samples:
                result = compiled_schema.validate(sample)
                assert result.valid == valid, goal.traverse_errors(result)
            stop = datetime.utcnow()

            # Results
            spent_time = (stop - start).total_seconds()
            results[valid].append(dict(
                size=size,
                sec=spent_time,
                vps=len(samples) / spent_time,
            ))

    # Print dataset
    for valid, stats_list in sorted(results.items()):
        # Dataset header
        print('"goal ({valid})"'.format(valid='Valid' if valid else 'Invalid'))

        # Values
        print("#size  time  vps")
        for stat in stats_list:
            print('{size: 5d} {sec: 4.2f} {vps: 10.2f}'.format(**stat))
        print('\n')  # split datasets

    # Calculate averages
    for valid, stats_list in sorted(results.items()):
        vps = sum(x['vps'] for x in stats_list) / len(stats_list)
        print('AVG: {valid:<8} {vps: 10.2f}'.format(
            valid='Valid' if valid else 'Invalid',
            vps=vps
        ), file=sys.stderr)
