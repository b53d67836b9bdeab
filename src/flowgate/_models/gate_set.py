"""
GateSet class
"""
from .gates._base_gate import Gate
from .gates._gates import gate_from_dict
from .transforms._channel_transform import ChannelTransform
from ..exceptions import GateReferenceError


class GateSet(object):
    """
    An ordered collection of gates referenced by role name (e.g. 'debris', 'population',
    'singlets'), together with the coordinate context the gates are expressed in.

    :param name: text string for the name of the gate set
    :param transform: ChannelTransform the gate geometry is expressed in, or None
        for raw instrument coordinates
    """
    def __init__(self, name, transform=None):
        if transform is not None and not isinstance(transform, ChannelTransform):
            raise TypeError("transform must be a ChannelTransform instance or None")

        self.name = name
        self.transform = transform
        self._gates = {}

    def __repr__(self):
        context = 'raw' if self.transform is None else 'transformed'

        return (
            f'{self.__class__.__name__}('
            f'{self.name}, {len(self._gates)} gates, {context})'
        )

    def __len__(self):
        return len(self._gates)

    def __iter__(self):
        return iter(list(self._gates.items()))

    def __contains__(self, role):
        return role in self._gates

    @property
    def roles(self):
        """List of gate roles, in the order the gates were added."""
        return list(self._gates.keys())

    def add_gate(self, gate, role=None):
        """
        Add a gate to the gate set. The gate must be expressed in the coordinate
        context of the gate set.

        :param gate: instance from a subclass of the Gate class
        :param role: text string used to reference the gate, defaults to the gate name
        :return: None
        """
        if not isinstance(gate, Gate):
            raise TypeError("gate must be a sub-class of the Gate class")

        if role is None:
            role = gate.gate_name

        if role in self._gates:
            raise KeyError("Gate role %s already exists in gate set %s" % (role, self.name))

        self._gates[role] = gate

    def get_gate(self, role):
        """
        Retrieve a gate by its role.

        :param role: text string of a gate role
        :return: Gate instance
        """
        try:
            return self._gates[role]
        except KeyError:
            raise GateReferenceError("Gate role %s does not exist in gate set %s" % (role, self.name))

    def remove_gate(self, role):
        """
        Remove a gate from the gate set.

        :param role: text string of a gate role
        :return: the removed Gate instance
        """
        if role not in self._gates:
            raise GateReferenceError("Gate role %s does not exist in gate set %s" % (role, self.name))

        return self._gates.pop(role)

    def transform_gates(self, channel_transform):
        """
        Re-express every gate in the coordinate context of the given ChannelTransform.
        Gates defined in another transformed context are first mapped back to raw
        coordinates.

        :param channel_transform: ChannelTransform instance, or None for raw coordinates
        :return: new GateSet instance
        """
        new_gate_set = GateSet(self.name, transform=channel_transform)

        for role, gate in self._gates.items():
            if channel_transform == self.transform:
                new_gate = gate
            else:
                new_gate = gate
                if self.transform is not None:
                    new_gate = new_gate.transform(self.transform, direction='inverse')
                if channel_transform is not None:
                    new_gate = new_gate.transform(channel_transform, direction='forward')

            new_gate_set.add_gate(new_gate, role=role)

        return new_gate_set

    def to_dict(self):
        """
        Returns a dictionary of the gate set, its gates & its coordinate context,
        suitable for serializing to JSON.

        :return: dictionary
        """
        return {
            'name': self.name,
            'transform': None if self.transform is None else self.transform.to_dict(),
            'gates': [
                {'role': role, 'gate': gate.to_dict()} for role, gate in self._gates.items()
            ]
        }

    @classmethod
    def from_dict(cls, gate_set_dict):
        """
        Create a GateSet from a dictionary created by the `to_dict` method.

        :param gate_set_dict: dictionary describing the gate set
        :return: GateSet instance
        """
        transform = gate_set_dict.get('transform')
        if transform is not None:
            transform = ChannelTransform.from_dict(transform)

        gate_set = cls(gate_set_dict['name'], transform=transform)

        for entry in gate_set_dict['gates']:
            gate_set.add_gate(gate_from_dict(entry['gate']), role=entry['role'])

        return gate_set
