from pytest import Item, fixture

from srpn.calculator import Calculator


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def calculator():
    return Calculator()


@fixture
def run(calculator, capsys):
    '''
    Process lines on one calculator, returning the lines printed.
    '''
    def run(*lines):
        for line in lines:
            calculator.process_line(line)
        return capsys.readouterr().out.splitlines()
    return run
