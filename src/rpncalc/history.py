'''
Recently entered lines.
'''

MAX_ENTRIES = 10
INITIAL_POSITION = -1


class EntryLineHistory:
    '''
    Most recent first list of entered lines, with a scroll position.
    '''

    def __init__(self, entries=()):
        self._entries = list(entries)[:MAX_ENTRIES]
        self.position = INITIAL_POSITION

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def add(self, line):
        '''
        Put line first, moving it there if it's already in the history.
        '''
        if line in self._entries:
            self._entries.remove(line)
        self._entries.insert(0, line)
        del self._entries[MAX_ENTRIES:]
        self.reset_position()

    def clear(self):
        self._entries.clear()
        self.reset_position()

    def reset_position(self):
        self.position = INITIAL_POSITION

    def scroll(self, up, current_line=None):
        '''
        Move to an older (up) or newer line and return it.

        If current_line was edited away from the line at the current
        position, scrolling down stays put. Return None if the position
        doesn't change.
        '''
        count = len(self._entries)
        at_position = (0 <= self.position < count and
                       current_line == self._entries[self.position])
        old = self.position
        if up:
            if (at_position or self.position < 0) and self.position < count - 1:
                self.position += 1
        elif (at_position or self.position >= count) and self.position > 0:
            self.position -= 1
        if self.position == old or not 0 <= self.position < count:
            return None
        return self._entries[self.position]

    def load(self, node):
        self.clear()
        if node is None:
            return
        for line_node in node.get_nodes():
            line = line_node.get_value('Text', '')
            if line:
                self._entries.append(line)
        del self._entries[MAX_ENTRIES:]
        self.position = node.get_value('Position', INITIAL_POSITION)

    def save(self, node):
        node.remove_nodes()
        node.set_value('Position', self.position)
        for index, line in enumerate(self._entries, 1):
            node.get_node('EntryLine{}'.format(index),
                          create=True).set_value('Text', line)

    def __repr__(self):
        return 'EntryLineHistory({!r})'.format(self._entries)
