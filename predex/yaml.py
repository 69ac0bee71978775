"""YAML helpers for build metadata."""

__all__ = [
    'dump',
    'load',
    'represent_mapping',
    'represent_path',
]

import collections.abc
import pathlib

import yaml


def represent_path(dumper, value):
    assert isinstance(value, pathlib.PurePath)
    return dumper.represent_scalar('tag:yaml.org,2002:str', str(value))


def represent_mapping(dumper, value, flow_style=None):
    """Derived from BaseRepresenter.represent_mapping but does not sort
       keys.
    """
    assert isinstance(value, collections.abc.Mapping)
    pairs = []
    tag = 'tag:yaml.org,2002:map'
    node = yaml.MappingNode(tag, pairs, flow_style=flow_style)
    if dumper.alias_key is not None:
        dumper.represented_objects[dumper.alias_key] = node
    best_style = True
    for item_key, item_value in value.items():
        node_key = dumper.represent_data(item_key)
        node_value = dumper.represent_data(item_value)
        if not isinstance(node_key, yaml.ScalarNode) or node_key.style:
            best_style = False
        if not isinstance(node_value, yaml.ScalarNode) or node_value.style:
            best_style = False
        pairs.append((node_key, node_value))
    if flow_style is None:
        if dumper.default_flow_style is not None:
            node.flow_style = dumper.default_flow_style
        else:
            node.flow_style = best_style
    return node


class Dumper(yaml.SafeDumper):
    pass


Dumper.add_representer(collections.OrderedDict, represent_mapping)
Dumper.add_multi_representer(pathlib.PurePath, represent_path)


def dump(data, stream=None):
    return yaml.dump(data, stream, Dumper=Dumper, default_flow_style=False)


def load(stream):
    return yaml.safe_load(stream)
