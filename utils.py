# utils.py
import logging
import getpass
from typing import Optional, Tuple

import paramiko

logger = logging.getLogger(__name__)

def format_mac(mac: str) -> str:
    """Formats a MAC address to lowercase with colons."""
    return mac.lower().replace("-", ":")

class SSHClient:
    """A utility class for handling SSH connections and command execution."""

    def __init__(self, hostname: str, username: str, password: Optional[str] = None,
                  timeout: int = 10):
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.client: Optional[paramiko.SSHClient] = None

    def connect(self) -> None:
        """Connects to the SSH server, using default SSH keys and agent.

        Raises:
            paramiko.SSHException, OSError: if the connection cannot be established.
        """
        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        if self.password:
            self.client.connect(hostname=self.hostname, username=self.username,
                                password=self.password, timeout=self.timeout)
            return
        try:
            self.client.connect(hostname=self.hostname, username=self.username,
                                timeout=self.timeout, look_for_keys=True, allow_agent=True)
        except paramiko.ssh_exception.PasswordRequiredException:
            self.password = getpass.getpass(f"Enter password for {self.username}@{self.hostname}: ")
            self.client.connect(hostname=self.hostname, username=self.username,
                                password=self.password, timeout=self.timeout)

    def execute_command(self, command: str, timeout: Optional[float] = None) -> Tuple[int, str, str]:
        """Executes a command on the connected SSH server.

        Returns:
            (exit status, stdout, stderr)
        """
        if not self.client:
            raise paramiko.SSHException("SSH client not connected. Call connect() first.")
        _, stdout, stderr = self.client.exec_command(command, timeout=timeout)
        output = stdout.read().decode(errors="replace")
        error = stderr.read().decode(errors="replace").strip()
        exit_status = stdout.channel.recv_exit_status()
        if error:
            logger.debug(f"Command '{command}' wrote to stderr: {error}")
        return exit_status, output, error

    def read_file(self, path: str) -> str:
        """Reads a text file from the SSH server over SFTP."""
        if not self.client:
            raise paramiko.SSHException("SSH client not connected. Call connect() first.")
        with self.client.open_sftp() as sftp:
            with sftp.open(path, "r") as remote_file:
                return remote_file.read().decode("utf-8")

    def close(self):
        """Closes the SSH connection."""
        if self.client:
            self.client.close()
            self.client = None
