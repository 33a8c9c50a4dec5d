'''
Tree of named nodes holding named values, for loading and saving state.
'''

from abc import ABC, abstractmethod
from enum import Enum


class Node(ABC):
    '''
    A named node with string, int or enum values and child nodes.
    '''

    @property
    @abstractmethod
    def name(self):
        pass

    @abstractmethod
    def _get_raw(self, name):
        '''
        Return the stored text for name, or None.
        '''

    @abstractmethod
    def _set_raw(self, name, text):
        pass

    @abstractmethod
    def get_node(self, name, create=False):
        '''
        Return the named child, creating it if asked to, or None.
        '''

    @abstractmethod
    def get_nodes(self):
        '''
        Return the children in the order they were added.
        '''

    @abstractmethod
    def remove_nodes(self):
        '''
        Remove all children.
        '''

    def get_value(self, name, default):
        '''
        Return the named value converted to the type of default.

        Missing or malformed values give default.
        '''
        text = self._get_raw(name)
        if text is None:
            return default
        if isinstance(default, Enum):
            try:
                return type(default)[text]
            except KeyError:
                return default
        elif isinstance(default, int) and not isinstance(default, bool):
            try:
                return int(text)
            except ValueError:
                return default
        return text

    def set_value(self, name, value):
        if isinstance(value, Enum):
            text = value.name
        else:
            text = str(value)
        self._set_raw(name, text)


class MemoryNode(Node):
    '''
    Node kept in memory, convertible to and from nested dicts.
    '''

    def __init__(self, name='', values=None, children=None):
        self._name = name
        self._values = dict(values or {})
        self._children = {}
        for child in children or ():
            self._children[child.name] = child

    @property
    def name(self):
        return self._name

    def _get_raw(self, name):
        return self._values.get(name)

    def _set_raw(self, name, text):
        self._values[name] = text

    def get_node(self, name, create=False):
        node = self._children.get(name)
        if node is None and create:
            node = self._children[name] = MemoryNode(name)
        return node

    def get_nodes(self):
        return list(self._children.values())

    def remove_nodes(self):
        self._children.clear()

    def to_dict(self):
        '''
        Return {'values': {...}, 'nodes': {name: {...}}}.
        '''
        return {
            'values': dict(self._values),
            'nodes': {name: child.to_dict()
                      for name, child in self._children.items()},
        }

    @classmethod
    def from_dict(cls, data, name=''):
        return cls(name, data.get('values'),
                   [cls.from_dict(child, child_name)
                    for child_name, child in data.get('nodes', {}).items()])

    def __repr__(self):
        return 'MemoryNode({!r}, {!r})'.format(self._name, self.to_dict())
