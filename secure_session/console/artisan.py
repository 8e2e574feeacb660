"""
Artisan-style console runner for session maintenance commands
"""
import asyncio
import importlib
import inspect
import sys
from pathlib import Path

from secure_session.console.command import Command
from secure_session.logging import getLogger

logger = getLogger(__name__)


class Artisan:
    # Paths to scan for commands
    COMMAND_PATHS = [
        Path(__file__).parent / 'commands',
    ]

    def __init__(self):
        self.commands = {}
        self._discover_commands()

    def _discover_commands(self):
        """Auto-discover commands"""
        for command_path in self.COMMAND_PATHS:
            if not command_path.exists():
                continue

            for py_file in sorted(command_path.glob('*.py')):
                if py_file.name.startswith('__'):
                    continue

                module_name = f"secure_session.console.commands.{py_file.stem}"
                try:
                    module = importlib.import_module(module_name)
                except Exception:
                    logger.warning("Could not load command module %s", py_file.name, exc_info=True)
                    continue

                for _, obj in inspect.getmembers(module, inspect.isclass):
                    if issubclass(obj, Command) and obj is not Command and obj.name:
                        self.register(obj())

    def register(self, command: Command):
        """Register a command instance under its name"""
        self.commands[command.name] = command

    def show_help(self):
        """Show available commands"""
        print("secure-session - session maintenance commands")
        print()

        if not self.commands:
            print("No commands available.")
            return

        for name in sorted(self.commands):
            cmd = self.commands[name]
            print(f"  {cmd.signature:<50} {cmd.description}")

        print()
        print("Run 'secure-session help <command>' for detailed information")

    async def run(self, argv):
        """Run the CLI application"""
        if len(argv) < 2:
            self.show_help()
            return 0

        command_name = argv[1]

        if command_name in ['help', '--help', '-h']:
            if len(argv) > 2:
                cmd_name = argv[2]
                if cmd_name in self.commands:
                    cmd = self.commands[cmd_name]
                    print(f"\nCommand: {cmd.name}")
                    print(f"Description: {cmd.description}")
                    print(f"Signature: {cmd.signature}")
                    return 0
                print(f"Unknown command: {cmd_name}\n")
                self.show_help()
                return 1
            self.show_help()
            return 0

        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        command = self.commands[command_name]
        args, kwargs = self._parse_args(argv[2:])

        try:
            exit_code = await command.handle(*args, **kwargs)
            return exit_code if exit_code is not None else 0
        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            logger.error("Command %s failed", command_name, exc_info=True)
            print(f"\n❌ Error executing command: {e}\n")
            return 1

    def _parse_args(self, argv):
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                # Long option (--force, --lifetime=60)
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    key = key.replace('-', '_')
                    try:
                        kwargs[key] = int(value)
                    except ValueError:
                        if value.lower() in ('true', 'false'):
                            kwargs[key] = value.lower() == 'true'
                        else:
                            kwargs[key] = value
                else:
                    kwargs[arg[2:].replace('-', '_')] = True
            elif arg.startswith('-'):
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs


def main() -> int:
    """Console script entry point"""
    return asyncio.run(Artisan().run(sys.argv))
