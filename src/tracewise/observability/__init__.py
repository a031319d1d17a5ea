# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the TraceWise SDK.

Classes:
    PipelineMetrics: Dataclass counting calls, attempts, retries and rejections.
    PrometheusPipelineMetrics: Prometheus counters and histograms for the pipeline.
"""

from .metrics import PipelineMetrics, PrometheusPipelineMetrics

__all__ = ["PipelineMetrics", "PrometheusPipelineMetrics"]
