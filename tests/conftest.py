import pytest

import calc

# Expression tests run twice:
# 1) through direct evaluation ["eval"]
# 2) through compile + Formula.evaluate ["formula"]
# A test asks for the `run` fixture instead of calling calc.evaluate itself, so
# every concrete expression also checks that compiling it folds to the same value.


@pytest.fixture(params=["eval", "formula"])
def backend_mode(request):
    return request.param


@pytest.fixture
def run(backend_mode):
    def _run(source, bindings=None):
        if backend_mode == "formula":
            return calc.compile(source).evaluate(bindings)
        return calc.evaluate(source, bindings)
    return _run
