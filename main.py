from rich.pretty import pprint

from switchyard import *


class BuildCommand:
    def main(self):
        pprint("building")


registry = Registry()
registry.register("build", BuildCommand, options=[["f", "force"], ["o", "output"]], descr="Build the project")


@registry.command("cache clear", descr="Drop cached artifacts")
def clear():
    pprint("cleared")


if __name__ == '__main__':
    configure()
    application = Application("myapp", "1.2.0")
    ErrorClassifier(application).register()
    invoke(Dispatcher(registry, application))
