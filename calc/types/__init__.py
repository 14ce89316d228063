from calc.types.expression import Exp, ExpGroup, is_symbolic
from calc.types.tokens import Tok
from calc.types.values import Value, coerce
from calc.types.variable import Var, VariableTable

__all__ = ["Exp", "ExpGroup", "is_symbolic", "Tok", "Value", "coerce", "Var", "VariableTable"]
