"""CLI module for orka-plugins."""
