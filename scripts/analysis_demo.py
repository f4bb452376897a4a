from beam_analysis.domain.beam import Beam, Material
from beam_analysis.engine.analysis import BeamAnalysis
from beam_analysis.engine.sampling import sample_equation


steel = Material(name="Genérico", properties={"EI": 210000})
beam = Beam(primary_span=4.0, secondary_span=3.0, material=steel)
w = 10.0

engine = BeamAnalysis()

for condition in engine.conditions():
    M = engine.get_bending_moment(beam, w, condition).equation
    V = engine.get_shear_force(beam, w, condition).equation
    y = engine.get_deflection(beam, w, condition).equation

    print(f"== {condition}")
    print("reacciones =", engine.get_reactions(beam, w, condition).as_dict())
    print("M(2) =", M(2.0).y)
    print("V(0) =", V(0.0).y)
    print("y(2) =", y(2.0, 2).y)

    serie = sample_equation(M, step=0.5)
    for s in serie.samples():
        print(f"  x={s.x:6.2f}  M={s.y:10.3f}")
