""" transforms module """
from ._transforms import \
    LinearTransform, \
    LogTransform, \
    LogicleTransform, \
    AsinhTransform
from ._channel_transform import ChannelTransform

__all__ = [
    'LinearTransform',
    'LogTransform',
    'LogicleTransform',
    'AsinhTransform',
    'ChannelTransform'
]
