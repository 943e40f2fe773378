"""ansible-alias: Run Ansible against the host or group a symlink is named after.

This package provides a small wrapper that is installed once and invoked
through symlinks named after inventory hosts or groups. It forwards to
ansible for ad-hoc modules or ansible-playbook for playbooks, with a
per-run log file and a fixed set of Ansible environment settings.
"""

__version__ = "0.1.0"
