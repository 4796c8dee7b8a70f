"""
Application layer: service orchestration and adapters.

Services receive every collaborator through their constructor; the
container in ``kbchat.application.container`` wires them once at startup.
"""
