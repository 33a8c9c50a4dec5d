from pytest import Item, fixture

from rpncalc.calculator import Calculator
from rpncalc.settings import DisplaySettings


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP.
    '''
    # Not bothering with make-style output that you can feed into a Vim
    # quickfix list and iterate over.
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def settings():
    return DisplaySettings()


@fixture
def calculator():
    return Calculator()


@fixture
def rpn(calculator):
    '''
    Return a function that enters values and runs commands, in order.

    Items naming a command run it; anything else goes through the entry
    line. Returns the last CommandResult.
    '''
    def run(*items):
        result = None
        for item in items:
            if calculator.has_command(item):
                result = calculator.execute_command(item)
            else:
                calculator.entry_line = item
                result = calculator.execute_command('Enter')
        return result
    return run
