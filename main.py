from rich.pretty import pprint

from tabargs import *

verbose = FlagCell()
name = TextBuffer(capacity=16)
loud = FlagCell()
times = NumberCell(1)


@handler("hello", id="hello")
def hello():
    """Greet someone, optionally loudly."""
    greeting = "hello, %s" % (name.value or "world")
    for _ in range(times.value):
        print(greeting.upper() if loud.value else greeting)


program = OptionGroup("Program Options", [
    flag("verbose", "print the parsed tables", destination=verbose),
    option("name", "who to greet", destination=name),
    hello,
])

greeting = OptionGroup("Hello Options", [
    flag("loud", "shout the greeting", destination=loud),
    option("times", "how many greetings", kind=ValueKind.UINT, destination=times),
], help="Prints a greeting for --name; see the options below.")


if __name__ == '__main__':
    context = Context(shell=True, colorful=True)
    register(context, program)
    register(context, greeting, "hello")
    run(context)
    if verbose:
        pprint(context.groups)
