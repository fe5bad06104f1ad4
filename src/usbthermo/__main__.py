from usbthermo.cli import run

run()
