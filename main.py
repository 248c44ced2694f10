"""
Novafield
=========

An interactive particle toy: the pointer sprays particles, attractors pull
them in, and attractors that grow too heavy explode into a nova.

Controls:
    - Mouse move: Particle trail
    - Left click: Particle burst (or grab / create an attractor)
    - Right click: Three expanding rings
    - SPACE: Pause/Resume
    - F: Freeze particles (unfreeze clears them)
    - A: Toggle attractor mode
    - C: Toggle attractor creation on left click
    - R / X: Reset / destroy attractors
    - BACKSPACE: Clear particles
    - G / V / H: Grid / attractor horizons / help text
    - 1-9: Presets
    - ESC: Quit
"""

import argparse

from tools.presets import PRESETS, print_preset_menu


def main():
    parser = argparse.ArgumentParser(
        description="Novafield particle toy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                    # Config defaults
  python main.py --preset storm     # Start with a preset
  python main.py --list-presets     # Show the preset menu
  python main.py --seed 42          # Reproducible randomness
        """
    )
    parser.add_argument("--preset", choices=sorted(PRESETS),
                        help="Preset to start with (default: config values)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for emission and nova scatter")
    parser.add_argument("--list-presets", action="store_true",
                        help="Print the preset menu and exit")
    args = parser.parse_args()

    if args.list_presets:
        print_preset_menu()
        return

    # Deferred so --help / --list-presets work without a display
    from core.application import Application

    app = Application(preset=args.preset, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
