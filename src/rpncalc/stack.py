'''
The operand stack.
'''

from enum import Enum
import logging

from .operations import load_value, save_value


logger = logging.getLogger(__name__)


class StackChange(Enum):
    ADDED = 'added'
    REMOVED = 'removed'
    RESET = 'reset'


class ValueStack:
    '''
    Stack of values, addressed by offset from the top (0 is the top).

    Observers are called with (change, value) for every push and pop, and
    with (StackChange.RESET, None) once after a load.
    '''

    def __init__(self):
        # Bottom first.
        self._storage = []
        self._observers = []
        self._resetting = 0

    def subscribe(self, callback):
        self._observers.append(callback)

    def unsubscribe(self, callback):
        self._observers.remove(callback)

    def _notify(self, change, value=None):
        if self._resetting:
            return
        for callback in list(self._observers):
            callback(change, value)

    def push(self, value):
        if value is None:
            raise ValueError('Cannot push None onto the stack')
        self._storage.append(value)
        self._notify(StackChange.ADDED, value)

    def push_range(self, values):
        '''
        Push values in order, so the last one ends up on top.
        '''
        for value in values:
            self.push(value)

    def pop(self):
        value = self.peek()
        self._storage.pop()
        self._notify(StackChange.REMOVED, value)
        return value

    def pop_range(self, count):
        '''
        Pop count values, returning them top first.
        '''
        values = self.peek_range(count)
        for value in values:
            self._storage.pop()
            self._notify(StackChange.REMOVED, value)
        return values

    def peek(self):
        if not self._storage:
            raise IndexError('Stack is empty')
        return self._storage[-1]

    def peek_range(self, count):
        '''
        Return the top count values, top first.
        '''
        if count < 0 or count > len(self._storage):
            raise IndexError('Stack has fewer than {} values'.format(count))
        return [self._storage[-1 - offset] for offset in range(count)]

    def peek_at(self, offset):
        if offset < 0 or offset >= len(self._storage):
            raise IndexError('No value at offset {}'.format(offset))
        return self._storage[-1 - offset]

    def clear(self):
        while self._storage:
            self.pop()

    def __len__(self):
        return len(self._storage)

    def __iter__(self):
        '''
        Iterate from the top down.
        '''
        return reversed(self._storage)

    def __repr__(self):
        return 'ValueStack({!r})'.format(self._storage)

    def load(self, node, settings=None):
        '''
        Replace the contents with values saved by save().

        Saved values that no longer parse are skipped.
        '''
        self._resetting += 1
        try:
            self._storage.clear()
            if node is not None:
                for value_node in node.get_nodes():
                    value = load_value(value_node, settings)
                    if value is None:
                        logger.warning('Skipping unreadable stack entry %s',
                                       value_node.name)
                        continue
                    self.push(value)
        finally:
            self._resetting -= 1
        self._notify(StackChange.RESET)

    def save(self, node, settings=None):
        '''
        Save the values as child nodes, bottom first, named Value<level>.
        '''
        node.remove_nodes()
        for level, value in zip(range(len(self), 0, -1), self._storage):
            save_value(value, node.get_node('Value{}'.format(level),
                                            create=True),
                       settings)
