"""
Stack lifecycle operations backed by the cdk command-line tool.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from cloudformation import StackManager
from config import CdkConfig

from .command_builder import build_command, build_params
from .errors import (
    CdkNotInstalled,
    StackBootstrapFailed,
    StackDeployFailed,
    StackDestroyFailed,
    StackDiffFailed,
    StackInitFailed,
    StackSynthFailed,
)
from .models import ParameterLike, ProcessOutcome
from .runner import run_cdk

logger = logging.getLogger(__name__)


class CdkClient:
    """Run init/synth/diff/deploy/destroy against a CDK project."""

    def __init__(
        self,
        config: CdkConfig,
        stack_manager: Optional[StackManager] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Profile, region and CDK project location
            stack_manager: Stack lookup used after deploy/synth; built from
                the config's profile and region when not provided
        """
        self.config = config
        self._stack_manager = stack_manager

    @property
    def stack_manager(self) -> StackManager:
        """Get or create the CloudFormation stack manager."""
        if self._stack_manager is None:
            self._stack_manager = StackManager(
                region=self.config.region, profile=self.config.profile
            )
        return self._stack_manager

    def _run(self, args: List[str]) -> ProcessOutcome:
        return run_cdk(
            args, cwd=self.config.cdk_path, cdk_command=self.config.cdk_command
        )

    def _describe(self, name: str) -> Optional[Dict[str, Any]]:
        return self.stack_manager.describe_stack(name)

    def init(self, language: str) -> None:
        """
        Initialize a new CDK app in the project directory.

        Raises:
            StackInitFailed: cdk exited non-zero
        """
        outcome = self._run(["init", "--language", language])
        if not outcome.success:
            raise StackInitFailed("CDK init failed", outcome.stderr)

    def destroy(
        self, name: str, parameters: Optional[Iterable[ParameterLike]] = None
    ) -> str:
        """
        Delete a stack.

        Args:
            name: Fully qualified stack name
            parameters: Complete listing of stack inputs

        Returns:
            The stack name

        Raises:
            StackDestroyFailed: cdk exited non-zero
        """
        args = ["destroy", name, "--force"] + build_params(
            name, parameters, self.config
        )
        outcome = self._run(args)
        if not outcome.success:
            raise StackDestroyFailed("Stack undeploy failed", outcome.stderr)
        return name

    def deploy(
        self,
        name: str,
        script: Optional[str] = None,
        parameters: Optional[Iterable[ParameterLike]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Deploy a stack.

        A run whose stderr reports ``<name> (no changes)`` counts as success
        whatever the exit code. Any other stderr output only fails the deploy
        when cdk also exits non-zero.

        Args:
            name: Fully qualified stack name
            script: Full path to the stack script
            parameters: Complete listing of stack inputs

        Returns:
            Live stack description after the deploy

        Raises:
            StackDeployFailed: cdk reported an error and exited non-zero
        """
        outcome = self._run(
            build_command("deploy", name, parameters, self.config, script_path=script)
        )
        if outcome.stderr:
            # Matches cdk's own wording; a reworded message would stop matching
            if f"{name} (no changes)" in outcome.stderr:
                logger.info("There are no changes to apply, continuing....")
            elif not outcome.success:
                raise StackDeployFailed("Stack deploy failed", outcome.stderr)
        return self._describe(name)

    def diff(
        self,
        name: str,
        script: Optional[str] = None,
        parameters: Optional[Iterable[ParameterLike]] = None,
    ) -> None:
        """
        Compare a stack with its deployed state.

        The diff itself only goes to the log.

        Raises:
            StackDiffFailed: cdk wrote anything to stderr
        """
        logger.debug(f"diff: {name} {script} {parameters}")
        outcome = self._run(
            build_command("diff", name, parameters, self.config, script_path=script)
        )
        if outcome.stderr:
            raise StackDiffFailed("Stack diff failed", outcome.stderr)

    def synth(
        self,
        name: str,
        script: Optional[str] = None,
        parameters: Optional[Iterable[ParameterLike]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Synthesize a stack template.

        Returns:
            Live stack description, or None if the stack was never deployed

        Raises:
            StackSynthFailed: cdk wrote anything to stderr
        """
        outcome = self._run(
            build_command("synth", name, parameters, self.config, script_path=script)
        )
        if outcome.stderr:
            raise StackSynthFailed("Stack synth failed", outcome.stderr)
        return self._describe(name)

    def version(self) -> str:
        """
        Get the installed cdk version.

        Raises:
            CdkNotInstalled: cdk could not be run
        """
        outcome = self._run(["--version"])
        if not outcome.success:
            raise CdkNotInstalled(
                "AWS CDK is not installed. Install with: npm install -g aws-cdk",
                outcome.stderr,
            )
        return outcome.stdout.strip()

    def bootstrap(self, account_id: Optional[str] = None) -> None:
        """
        Bootstrap the CDK toolkit stack in the configured account and region.

        Args:
            account_id: Target account; looked up through STS when omitted

        Raises:
            StackBootstrapFailed: cdk exited non-zero
        """
        account = account_id or self.stack_manager.get_account_id()
        environment = f"aws://{account}/{self.config.region}"
        logger.info(f"Bootstrapping CDK in {environment}...")

        outcome = self._run([
            "bootstrap", environment,
            "--profile", self.config.profile,
            "--region", self.config.region,
        ])
        if not outcome.success:
            raise StackBootstrapFailed("CDK bootstrap failed", outcome.stderr)
