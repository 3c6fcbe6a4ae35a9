# Standard library of builtins available to TinyScript programs.
