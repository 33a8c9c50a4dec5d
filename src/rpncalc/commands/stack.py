'''
Commands that rearrange the stack.

The N forms without a parameter take their count from an Integer on top of
the stack, which is consumed along with the values.
'''

from functools import cmp_to_key

from .. import operations
from ..numeric import IntegerValue
from .base import Commands


class StackCommands(Commands):

    def clear(self, command):
        count = len(self.stack)
        if count > 0:
            command.use_top_values(count)
            command.commit()
        else:
            command.cancel()

    def drop(self, command):
        if len(self.stack) > 0:
            self._drop(command, 1)
        else:
            command.cancel()

    def drop2(self, command):
        self._drop(command, 2)

    def drop_n(self, command):
        self._drop(command, self.top_as_count() + 1)

    def drop_count(self, command, count):
        self.require_non_negative_count(count)
        self._drop(command, count)

    def _drop(self, command, count):
        self.require_args(count)
        command.use_top_values(count)
        command.commit()

    def dup(self, command):
        if len(self.stack) > 0:
            self._dup(command, 1, 0)
        else:
            command.cancel()

    def dup2(self, command):
        self._dup(command, 2, 0)

    def dup_n(self, command):
        self._dup(command, self.top_as_count() + 1, 1)

    def dup_count(self, command, count):
        self.require_non_negative_count(count)
        self._dup(command, count, 0)

    def _dup(self, command, count, skip):
        '''
        Duplicate the values under the top skip values, which are consumed.
        '''
        self.require_args(count)
        last_args = self.stack.peek_range(count)
        command.use_top_values(skip)
        command.commit(*reversed(last_args[skip:]))
        command.set_last_args(last_args)

    def keep_n(self, command):
        self._keep(command, self.top_as_count() + 1, 1)

    def keep_count(self, command, count):
        self.require_non_negative_count(count)
        self._keep(command, count, 0)

    def _keep(self, command, count, skip):
        '''
        Drop everything except the top count values (less the skipped ones).
        '''
        self.require_args(count)
        values = command.use_top_values(len(self.stack))
        kept = values[skip:count]
        command.commit(*reversed(kept))
        command.set_last_args(values[:skip] + values[count:])

    def pick(self, command):
        '''
        Copy the value at the stack position given by the top Integer.
        '''
        self.require_args(1)
        position = self.top_as_integer()
        self.require_positive_stack_position(position)
        self.require_args(position + 1)
        command.use_top_values(1)
        command.commit(self.stack.peek_at(position))

    def pick_offset(self, command, offset):
        self.require_non_negative_count(offset)
        self.require_args(offset + 1)
        command.commit(self.stack.peek_at(offset))

    def remove(self, command, offset):
        '''
        Remove the value at offset, keeping the ones above it.
        '''
        self.require_non_negative_count(offset)
        if offset == 0:
            self.drop(command)
            return
        self.require_args(offset + 1)
        values = command.use_top_values(offset + 1)
        command.commit(*reversed(values[:offset]))
        command.set_last_args([values[offset]])

    def roll_down_n(self, command):
        self._roll(command, self.top_as_count() + 1, 1, up=False)

    def roll_down_count(self, command, count):
        self.require_non_negative_count(count)
        self._roll(command, count, 0, up=False)

    def roll_up3(self, command):
        self._roll(command, 3, 0, up=True)

    def roll_up_n(self, command):
        self._roll(command, self.top_as_count() + 1, 1, up=True)

    def roll_up_count(self, command, count):
        self.require_non_negative_count(count)
        self._roll(command, count, 0, up=True)

    def _roll(self, command, count, skip, up):
        '''
        Rotate count values; rolling up brings the deepest one to the top.
        '''
        self.require_args(count)
        last_args = self.stack.peek_range(skip)
        # Top first.
        values = command.use_top_values(count)[skip:]
        if values:
            if up:
                values.insert(0, values.pop())
            else:
                values.append(values.pop(0))
        command.commit(*reversed(values))
        command.set_last_args(last_args)

    def sigma_n(self, command):
        self._sigma(command, self.top_as_count() + 1, 1)

    def sigma_count(self, command, count):
        self.require_non_negative_count(count)
        self._sigma(command, count, 0)

    def _sigma(self, command, count, skip):
        self.require_args(count)
        values = command.use_top_values(count)[skip:]
        if not values:
            command.commit(IntegerValue(0))
            return
        total = values[0]
        for value in values[1:]:
            total = operations.add(total, value, self.settings)
        command.commit(total)

    def sort_n(self, command):
        self._sort(command, self.top_as_count() + 1, 1)

    def sort_count(self, command, count):
        self.require_non_negative_count(count)
        self._sort(command, count, 0)

    def _sort(self, command, count, skip):
        '''
        Sort count values so the largest ends up on top.
        '''
        self.require_args(count)
        last_args = self.stack.peek_range(skip)
        values = command.use_top_values(count)[skip:]
        values.sort(key=cmp_to_key(operations.compare))
        command.commit(*values)
        command.set_last_args(last_args)

    def swap(self, command):
        self.require_args(2)
        top, second = command.use_top_values(2)
        command.commit(top, second)

    COMMANDS = {
        'Clear': clear,
        'Drop': drop,
        'Drop2': drop2,
        'DropN': drop_n,
        'Dup': dup,
        'Dup2': dup2,
        'DupN': dup_n,
        'KeepN': keep_n,
        'Pick': pick,
        'RollDownN': roll_down_n,
        'RollUp3': roll_up3,
        'RollUpN': roll_up_n,
        'SigmaN': sigma_n,
        'SortN': sort_n,
        'Swap': swap,
    }

    PARAMETRIZED_COMMANDS = {
        'DropN': drop_count,
        'DupN': dup_count,
        'KeepN': keep_count,
        'Pick': pick_offset,
        'Remove': remove,
        'RollDownN': roll_down_count,
        'RollUpN': roll_up_count,
        'SigmaN': sigma_count,
        'SortN': sort_count,
    }
