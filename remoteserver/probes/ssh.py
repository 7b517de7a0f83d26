"""
SSH authentication-method exposure probe.

The OpenSSH client is run with every authentication method disabled, so the
handshake stops right after the server lists the methods it would accept,
e.g.::

    debug1: Authentications that can continue: publickey,password
    user@host: Permission denied (publickey,password).

The last such list in the client's output is taken as the server's offer.
"""

import re
from datetime import datetime
from typing import List, Optional, Tuple

from remoteserver.exceptions import TargetError
from remoteserver.probes.base import BaseProbe, Outcome
from remoteserver.utils.network import parse_target

DEFAULT_SSH_PORT = 22

_METHOD = r"[\w@.\-]+"
METHOD_LIST_PATTERNS = [
    re.compile(r"Permission denied\s*\((%s(?:,%s)*)\)" % (_METHOD, _METHOD)),
    re.compile(r"Authentications that can continue:\s*(%s(?:,%s)*)" % (_METHOD, _METHOD)),
]


def parse_auth_methods(output: str) -> List[str]:
    """
    Extract the advertised method list from ssh client output.

    Returns the tokens of the last match across all lines, or [] when no
    line carries a method list.
    """
    methods: List[str] = []
    for line in output.splitlines():
        for pattern in METHOD_LIST_PATTERNS:
            found = pattern.findall(line)
            if found:
                methods = found[-1].split(",")
    return methods


class SshAuthProbe(BaseProbe):
    """Discover which authentication methods an SSH server offers."""

    check_name = "ssh_auth_enabled"

    def build_command(self, host: str, port: int) -> List[str]:
        connect_timeout = max(1, int(self.config.timeout))
        options = [
            "BatchMode=yes",
            "PreferredAuthentications=none",
            "PubkeyAuthentication=no",
            "PasswordAuthentication=no",
            "KbdInteractiveAuthentication=no",
            "GSSAPIAuthentication=no",
            "HostbasedAuthentication=no",
            "StrictHostKeyChecking=no",
            "UserKnownHostsFile=/dev/null",
            f"ConnectTimeout={connect_timeout}",
        ]
        command = [self.config.ssh_binary, "-v", "-p", str(port)]
        for option in options:
            command += ["-o", option]
        return command + ["-l", self.config.ssh_user, "--", host, "exit"]

    def probe(self, target: str) -> Tuple[List[str], Optional[str]]:
        """Return (methods, error); error says why no list was obtained."""
        try:
            host, port = parse_target(target, DEFAULT_SSH_PORT)
        except TargetError as e:
            return [], str(e)

        result = self.executor.run_command(
            self.build_command(host, port),
            timeout=self.config.timeout,
        )
        methods = parse_auth_methods(result.stdout + "\n" + result.stderr)
        self.logger.debug(f"ssh {host}:{port} advertises {methods or 'nothing'}")
        if methods:
            return methods, None
        if result.timed_out:
            return [], f"ssh timed out after {self.config.timeout:g}s"
        reason = result.stderr.strip().splitlines()[-1] if result.stderr.strip() else ""
        return [], reason or f"ssh exited with status {result.return_code}"

    def auth_methods(self, target: str) -> List[str]:
        """Methods advertised by the server at ``target`` (host or host:port)."""
        return self.probe(target)[0]

    def enabled(self, target: str, method: str, description: str = "") -> Outcome:
        """Passes iff ``method`` is in the advertised list."""
        started = datetime.now()
        methods, error = self.probe(target)
        passed = method in methods

        diagnostic = None
        if not passed:
            if methods:
                diagnostic = (
                    f"Authentication method {method} not offered by {target} "
                    f"(offered: {','.join(methods)})"
                )
            else:
                diagnostic = f"No authentication methods observed for {target}: {error}"
            self.logger.warning(diagnostic)

        return self._outcome(
            passed, description, target, started,
            diagnostic=diagnostic, check="ssh_auth_enabled",
        )

    def disabled(self, target: str, method: str, description: str = "") -> Outcome:
        """
        Passes iff ``method`` is absent from the advertised list.

        An unreachable server yields an empty list and therefore passes; this
        cannot be told apart from a server that really refuses the method, so
        it is logged as a warning.
        """
        started = datetime.now()
        methods, error = self.probe(target)
        passed = method not in methods

        if not methods:
            self.logger.warning(
                f"ssh_auth_disabled {target} {method}: passing without an "
                f"observed method list ({error})"
            )

        diagnostic = None
        if not passed:
            diagnostic = f"Authentication method {method} offered by {target}"
            self.logger.warning(diagnostic)

        return self._outcome(
            passed, description, target, started,
            diagnostic=diagnostic, check="ssh_auth_disabled",
        )
