from rich.pretty import pprint

from herald import *

__prog__ = "herald"


def heal(interpreter, args, kwargs):
    target, amount = args
    interpreter["health"] = amount
    pprint({"target": target, "health": amount})


interpreter = Interpreter(variables={"health": 50}, shell=True, colorful=True)
interpreter.register("heal: target:@ amount:int=10 ~health", heal)


if __name__ == '__main__':
    pprint(interpreter.lookup("heal"))
    pprint(interpreter.parse("heal 7 ~3"))
    interpreter.execute("heal 7 ~-5")
    interpreter.execute("heal abc")
