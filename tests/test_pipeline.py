from __future__ import annotations

import numpy as np
import pytest

from framedsp import generators, nodes, sinks
from framedsp.config import NodeConfig, PipelineConfig
from framedsp.pipeline import NODE_TYPES, Pipeline, build_node
from framedsp.node_contracts import get_node_contract


def test_pipeline_sums_sources_and_runs_stages():
    sine = generators.GenNode(generators.SineGen(1.0), 4.0, 4)
    step = generators.GenNode(generators.StepGen(0.2), 4.0, 4)
    collector = sinks.FrameCollector()
    pipeline = Pipeline([sine, step], [nodes.GainNode(2.0, 4)], collector, frame_size=4)

    out = pipeline.pull()

    np.testing.assert_allclose(out, [0.0, 4.0, 2.0, 0.0], atol=1e-5)
    np.testing.assert_allclose(collector.frames[0], out)
    assert pipeline.frames_pulled == 1


def test_pipeline_run_and_render():
    gen = generators.GenNode(generators.ImpulseGen(), 4.0, 4)
    meter = sinks.LevelMeterSink()
    pipeline = Pipeline([gen], sink=meter, frame_size=4)

    assert pipeline.run(3) == 3
    assert [peak for peak, _ in meter.levels] == [1.0, 0.0, 0.0]

    gen.reset()
    data = pipeline.render(2)
    np.testing.assert_array_equal(data, [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    assert pipeline.render(0).shape == (0,)


def test_pipeline_requires_a_source():
    with pytest.raises(ValueError):
        Pipeline([], frame_size=4)


def test_from_config_builds_nodes():
    config = PipelineConfig(
        sources=[
            NodeConfig(name="tone", type="sine", params={"frequency": 1.0}),
            NodeConfig(name="offset", type="step", params={"step_time": 0.2}),
        ],
        stages=[
            NodeConfig(name="half", type="gain", params={"scale": 0.5}),
            NodeConfig(name="lift", type="real_to_complex"),
            NodeConfig(name="drop", type="complex_to_real"),
        ],
        sink=NodeConfig(name="keep", type="collector"),
    )

    pipeline = Pipeline.from_config(config, sample_rate=4.0, frame_size=4)
    out = pipeline.pull()

    np.testing.assert_allclose(out, [0.0, 1.0, 0.5, 0.0], atol=1e-5)
    assert [type(stage).__name__ for stage in pipeline.stages] == [
        "GainNode",
        "RealToComplexNode",
        "ComplexToRealNode",
    ]
    assert pipeline.stages[0].name == "half"
    assert isinstance(pipeline.sink, sinks.FrameCollector)


def test_from_config_rejects_domain_mismatch():
    config = PipelineConfig(
        sources=[NodeConfig(name="tone", type="sine")],
        stages=[NodeConfig(name="bins", type="spectrum")],
    )
    with pytest.raises(ValueError, match="expects frequency frames"):
        Pipeline.from_config(config, sample_rate=48000.0, frame_size=8)


def test_from_config_rejects_binary_stage():
    config = PipelineConfig(
        sources=[NodeConfig(name="tone", type="sine")],
        stages=[NodeConfig(name="mix", type="sum")],
    )
    with pytest.raises(ValueError, match="single-input"):
        Pipeline.from_config(config, sample_rate=48000.0, frame_size=8)


def test_from_config_rejects_non_producer_source():
    config = PipelineConfig(sources=[NodeConfig(name="g", type="gain")])
    with pytest.raises(ValueError, match="not a producer"):
        Pipeline.from_config(config, sample_rate=48000.0, frame_size=8)


def test_from_config_rejects_non_consumer_sink():
    config = PipelineConfig(
        sources=[NodeConfig(name="tone", type="sine")],
        sink=NodeConfig(name="g", type="gain"),
    )
    with pytest.raises(ValueError, match="not a consumer"):
        Pipeline.from_config(config, sample_rate=48000.0, frame_size=8)


def test_unknown_node_type():
    with pytest.raises(KeyError):
        build_node(NodeConfig(name="x", type="reverb"), 8, 48000.0)


def test_every_node_type_has_a_contract():
    for type_name in NODE_TYPES:
        assert get_node_contract(type_name) is not None, type_name


def test_spectrum_chain_from_config():
    config = PipelineConfig(
        sources=[NodeConfig(name="imp", type="impulse")],
        stages=[
            NodeConfig(name="win", type="window", params={"kind": "rectangular"}),
            NodeConfig(name="fft", type="fft"),
            NodeConfig(name="mag", type="spectrum", params={"mode": "magnitude"}),
        ],
    )
    pipeline = Pipeline.from_config(config, sample_rate=8.0, frame_size=8)

    np.testing.assert_allclose(pipeline.pull(), np.ones(8), atol=1e-6)


def test_built_nodes_match_their_contract_domains():
    for type_name in NODE_TYPES:
        contract = get_node_contract(type_name)
        node = build_node(NodeConfig(name=type_name, type=type_name), 8, 48000.0)
        if contract.role in ("producer", "transformer", "combiner"):
            assert node.output_domain == contract.output_domain, type_name
        if contract.role in ("transformer", "combiner"):
            assert node.input_domain == contract.input_domain, type_name


def test_constructor_rejects_binary_stage():
    gen = generators.GenNode(generators.SineGen(1.0), 4.0, 4)

    with pytest.raises(ValueError, match="single-input"):
        Pipeline([gen], [nodes.SumNode(4)], frame_size=4)


def test_constructor_rejects_mismatched_roles():
    gen = generators.GenNode(generators.SineGen(1.0), 4.0, 4)

    with pytest.raises(ValueError, match="not a producer"):
        Pipeline([nodes.GainNode(1.0, 4)], frame_size=4)
    with pytest.raises(ValueError, match="single-input"):
        Pipeline([gen], [sinks.NullSink()], frame_size=4)
    with pytest.raises(ValueError, match="not a consumer"):
        Pipeline([gen], sink=nodes.GainNode(1.0, 4), frame_size=4)
