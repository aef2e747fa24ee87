"""
jumparc game wiring.

- `runtime`: frame + fixed-step loop around a `JumpController`.
- `app`: Panda3D ShowBase demo used by `python -m jumparc --window`.
"""
