"""
Default boundary estimators used for fitting gates.

An estimator receives a 2-D NumPy array of reference points (one row per event,
columns in the order of the config channels) and a RegionGateConfig, and returns
a boundary instance. Custom estimators following the same call signature can be
given to RegionGate.fit.
"""
import numpy as np
from scipy import stats
from sklearn.mixture import GaussianMixture
from sklearn.linear_model import HuberRegressor
from .._models.gates._boundaries import EllipseBoundary, BandBoundary
from ..exceptions import InsufficientDataError, InvalidProbabilityError


def estimate_quantile_threshold(values, probability):
    """
    Estimate the probability quantile of 1-D data, using linear interpolation
    between order statistics. Non-finite values are ignored.

    :param values: 1-D NumPy array of values
    :param probability: probability in the interval (0, 1]
    :return: float threshold value
    :raises InvalidProbabilityError: if probability is not in (0, 1]
    :raises InsufficientDataError: if there are no finite values
    """
    if not 0.0 < probability <= 1.0:
        raise InvalidProbabilityError("Probability must be in the interval (0, 1], received %r" % probability)

    values = np.asarray(values, dtype=np.float64)
    values = values[np.isfinite(values)]

    if len(values) == 0:
        raise InsufficientDataError("Cannot estimate a quantile without events")

    return float(np.quantile(values, probability))


def _check_event_count(points, min_events, method):
    if points.shape[0] < min_events:
        raise InsufficientDataError(
            "Fitting a %s boundary requires at least %d events, found %d" % (method, min_events, points.shape[0])
        )


def estimate_cluster_ellipse(points, config):
    """
    Estimate an elliptical boundary from a Gaussian mixture model. The mixture has
    `config.cluster_count` components with full covariance matrices. The component
    closest to `config.target` (or the component with the largest weight) is
    selected, and the ellipse covering `config.confidence_level` of that component
    is returned.

    :param points: 2-D NumPy array of reference events
    :param config: RegionGateConfig instance
    :return: EllipseBoundary instance
    :raises InsufficientDataError: if there are fewer than config.min_events events
    """
    _check_event_count(points, config.min_events, 'cluster ellipse')

    model = GaussianMixture(
        n_components=config.cluster_count,
        covariance_type='full',
        random_state=config.random_seed
    )
    model.fit(points)

    if config.target is None:
        cluster_idx = int(np.argmax(model.weights_))
    else:
        distances = np.linalg.norm(model.means_ - np.array(config.target), axis=1)
        cluster_idx = int(np.argmin(distances))

    # the squared Mahalanobis distance of a bivariate normal follows a chi-square
    # distribution with 2 degrees of freedom
    distance_square = stats.chi2.ppf(config.confidence_level, 2)

    return EllipseBoundary(
        model.means_[cluster_idx],
        model.covariances_[cluster_idx],
        distance_square
    )


def estimate_regression_band(points, config):
    """
    Estimate a band boundary around a robust linear regression of the 2nd column
    (e.g. FSC-A) on the 1st column (e.g. FSC-H). The regression uses a Huber loss
    so doublets and debris have little influence on the fit. The band half width
    is the two-sided normal quantile of `config.prediction_level` times the robust
    residual scale (the normalized median absolute deviation of the residuals).
    The band spans the observed range of the 1st column.

    :param points: 2-D NumPy array of reference events
    :param config: RegionGateConfig instance
    :return: BandBoundary instance
    :raises InsufficientDataError: if there are fewer than config.min_events events,
        or the 1st column has no spread
    """
    _check_event_count(points, config.min_events, 'regression band')

    x = points[:, 0]
    y = points[:, 1]

    x_mean, x_std = x.mean(), x.std()
    y_mean, y_std = y.mean(), y.std()

    if x_std == 0:
        raise InsufficientDataError("Fitting a regression band requires events with different x values")
    if y_std == 0:
        y_std = 1.0

    # fit on standardized values, large scatter values make the solver unstable
    model = HuberRegressor(alpha=0.0, max_iter=1000)
    model.fit(((x - x_mean) / x_std).reshape(-1, 1), (y - y_mean) / y_std)

    slope = model.coef_[0] * y_std / x_std
    intercept = y_mean + model.intercept_ * y_std - slope * x_mean

    # normalized median absolute deviation, consistent with the standard deviation
    # of normally distributed residuals
    residuals = y - (slope * x + intercept)
    scale = 1.4826 * np.median(np.abs(residuals - np.median(residuals)))

    z = stats.norm.ppf(0.5 + config.prediction_level / 2.0)

    return BandBoundary(
        slope=slope,
        intercept=intercept,
        half_width=z * scale,
        x_min=x.min(),
        x_max=x.max()
    )


def get_default_estimator(method):
    """
    Retrieve the default boundary estimator for a RegionGateConfig method.

    :param method: 'ellipse' or 'band'
    :return: estimator function
    """
    if method == 'ellipse':
        return estimate_cluster_ellipse
    elif method == 'band':
        return estimate_regression_band
    else:
        raise ValueError("No estimator available for method %s" % method)
