import logging

import numpy as np
from arch import arch_model

from models import GARCHFit, ReturnSeries
from utils.exceptions import ConvergenceError, InvalidInputError
from .data_prep import GarchDataPrep

logger = logging.getLogger(__name__)

PARAM_NAMES = ['omega', 'alpha[1]', 'beta[1]']


class GARCHEstimator:
    """Estimates a zero-mean GARCH(1,1) with Gaussian innovations"""

    def __init__(self, min_observations: int = 30,
                 max_iter: int = 1000,
                 burn_in: int = 1,
                 require_stationary: bool = True):
        """
        Initialize estimator

        Args:
            min_observations: Minimum number of returns for a reliable fit
            max_iter: Optimizer iteration budget
            burn_in: Leading fitted entries reported as NaN (max(p, q) for GARCH(1,1))
            require_stationary: Raise when alpha + beta >= 1 instead of only warning
        """
        if burn_in < 0:
            raise ValueError(f"burn_in must be non-negative, got {burn_in}")
        self.min_observations = min_observations
        self.max_iter = max_iter
        self.burn_in = burn_in
        self.require_stationary = require_stationary
        self.data_prep = GarchDataPrep()

    def _validate_input(self, returns: ReturnSeries):
        is_valid, issues = self.data_prep.verify_data_quality(
            returns, min_observations=self.min_observations
        )
        if not is_valid:
            raise InvalidInputError("; ".join(issues))
        if len(returns) <= self.burn_in:
            raise InvalidInputError(
                f"Burn-in of {self.burn_in} leaves no observations out of {len(returns)}"
            )

    def _mask_burn_in(self, values) -> np.ndarray:
        arr = np.array(values, dtype=float)
        arr[:self.burn_in] = np.nan
        return arr

    def fit(self, returns: ReturnSeries) -> GARCHFit:
        """
        Fit GARCH(1,1) by maximum likelihood

        Args:
            returns: Percentage log returns

        Returns:
            GARCHFit with estimates, classic (inverse Hessian) standard errors
            and the fitted conditional volatility and standardized residuals

        Raises:
            InvalidInputError: on short or non-finite input
            ConvergenceError: if the optimizer fails or the fit is non-stationary
        """
        self._validate_input(returns)

        logger.info(
            f"Fitting GARCH(1,1) to {len(returns)} returns "
            f"({returns.dates[0]:%Y-%m-%d} to {returns.dates[-1]:%Y-%m-%d})"
        )

        model = arch_model(
            returns.to_series(),
            mean='Zero',
            vol='GARCH',
            p=1,
            q=1,
            dist='normal',
            rescale=False  # returns are already in percent
        )

        result = model.fit(
            disp='off',
            show_warning=False,
            update_freq=0,
            cov_type='classic',
            options={'maxiter': self.max_iter}
        )

        message = str(getattr(result.optimization_result, 'message', ''))
        if result.convergence_flag != 0:
            logger.error(
                f"Optimizer failed (flag {result.convergence_flag}): {message}"
            )
            raise ConvergenceError(
                f"GARCH(1,1) optimizer did not converge within {self.max_iter} "
                f"iterations: {message}"
            )

        fit = GARCHFit(
            params={name: float(result.params[name]) for name in PARAM_NAMES},
            std_errors={name: float(result.std_err[name]) for name in PARAM_NAMES},
            tvalues={name: float(result.tvalues[name]) for name in PARAM_NAMES},
            pvalues={name: float(result.pvalues[name]) for name in PARAM_NAMES},
            conditional_volatility=self._mask_burn_in(result.conditional_volatility),
            std_residuals=self._mask_burn_in(result.std_resid),
            dates=returns.dates,
            burn_in=self.burn_in,
            loglikelihood=float(result.loglikelihood),
            aic=float(result.aic),
            bic=float(result.bic),
            nobs=int(result.nobs),
            convergence_flag=int(result.convergence_flag),
            message=message
        )

        self._log_summary(fit)

        if not fit.is_stationary:
            logger.warning(
                f"Non-stationary fit: alpha + beta = {fit.persistence:.6f} >= 1"
            )
            if self.require_stationary:
                raise ConvergenceError(
                    f"Fitted persistence alpha + beta = {fit.persistence:.6f} violates "
                    f"the stationarity constraint"
                )

        return fit

    def _log_summary(self, fit: GARCHFit):
        """Log parameter estimates and fit statistics"""
        lines = [
            f"  {name:<9} {fit.params[name]:10.6f} (se {fit.std_errors[name]:.6f})"
            for name in PARAM_NAMES
        ]
        logger.info(
            "GARCH(1,1) estimates:\n" + "\n".join(lines) +
            f"\n  Persistence: {fit.persistence:.4f}"
            f"\n  Log-likelihood: {fit.loglikelihood:.3f}"
        )
